# quicksorty

An in-place quicksort library. It sorts lists of integers, floats,
strings and byte strings, sorts sized items by their length, and sorts
any indexable collection through a single "lesswap" callback. A large
input can be split among several worker threads.

## Installation

```
pip install quicksorty
```

To run the tests:

```
pip install "quicksorty[test]"
pytest
```

## Sorting lists by value

```python
from quicksorty.dispatch import sort_slice, is_sorted_slice
from quicksorty.core import FloatOption

data = [5, -1, 3, 3, 0]
sort_slice(data)                  # sorted in place, ascending
assert is_sorted_slice(data) == 0

floats = [2.5, float("nan"), -1.0]
sort_slice(floats, nan_option=FloatOption.NAN_SMALL)  # NaNs go first
```

`sort_slice` looks at the elements to pick a sorter. The list must hold
only `int`s (not `bool`s), only `float`s, only `str`s, or only `bytes` /
`bytearray`. Any other element type, a mix of types, or passing a
`str` / `bytes` object itself raises `TypeError`. An empty list is left
as it is.

The `is_sorted_*` functions return `0` for a sorted list. Otherwise they
return an index `i > 0` where `ar[i] < ar[i-1]`. For floats the index is
counted from the start of the part left after the NaNs are skipped
(trailing NaNs with `NAN_LARGE`, leading NaNs with `NAN_SMALL`).

Each element type also has its own entry point:

- `quicksorty.ordered.sort_ints`, `sort_strings`, `sort_floats`,
  `is_sorted_ordered` and `is_sorted_floats`
- `quicksorty.bytesort.sort_bytes` and `is_sorted_bytes`. Their
  elements must be `bytes` or `bytearray`; anything else raises
  `TypeError`.

### NaN handling

Float sorting takes a `nan_option`:

- `FloatOption.NAN_LARGE` puts NaNs at the end.
- `FloatOption.NAN_SMALL` puts NaNs at the start.
- `FloatOption.NAN_IGNORE` does not treat NaNs specially. If the input
  contains NaNs, the result is not defined.

If `nan_option` is not given, `quicksorty.core.settings.nan_option` is
used. It starts out as `NAN_LARGE`.

## Sorting by length

```python
from quicksorty.bylen import sort_len, is_sorted_len

words = ["ccc", "a", "bb", ""]
sort_len(words)
assert [len(w) for w in words] == [0, 1, 2, 3]
assert is_sorted_len(words) == 0
```

Every element must have a length (strings, lists, tuples, ...). If one
does not, `TypeError` is raised. The order of items of equal length is
not kept.

## Sorting any collection with a lesswap function

A lesswap function `lsw(i, k, r, s)` compares the items at `i` and `k`
with a strict ordering. If `i` comes before `k`, it swaps `r` and `s`
(only when `r != s`) and returns `True`. Otherwise it returns `False`:

```python
from quicksorty.lesswap import sort, is_sorted

records = [("bob", 31), ("ann", 25), ("cid", 40)]

def lsw(i, k, r, s):
    if records[i][1] < records[k][1]:
        if r != s:
            records[r], records[s] = records[s], records[r]
        return True
    return False

sort(len(records), lsw)
assert is_sorted(len(records), lsw) == 0
```

The strict comparison, the `r != s` check, the swap and the return value
are all required for this to work. When more than one worker is used,
the callback is called from several threads at once, on separate index
ranges.

## Workers

Every sorting function takes a keyword-only `max_gor` argument. It is the
largest number of workers, the calling thread included, that one call
may use. Workers are `threading` threads. With `max_gor` of 1, or with a
short input, sorting runs on the calling thread only and no thread is
started. If a worker raises, the call waits for the others and then
re-raises the first error.

If `max_gor` is not given, `quicksorty.core.settings.max_gor` is used.
It starts out as 3. `settings` is a `Settings` instance that checks its
values on assignment. `max_gor` must be an `int` from 1 to 4096, and
`nan_option` must be a `FloatOption` value.

```python
from quicksorty.core import settings

settings.max_gor = 1    # single-threaded from now on
```

The length limits for insertion sort and for recursion are the module
constants `MAX_LEN_INS`, `MAX_LEN_INS_FC`, `MAX_LEN_REC` and
`MAX_LEN_REC_FC` in `quicksorty.core`.

Python threads share one interpreter lock, so extra workers do not make
pure-Python sorting faster. The package offers no way to run sorting in
separate processes.

## Searching

`quicksorty.core.search(n, fn)` returns the lowest `k` in `[0, n)` for
which `fn(k)` is true, assuming `fn(k)` implies `fn(k+1)`. If there is no
such `k`, it returns `n`:

```python
from quicksorty.core import search

data = [1, 3, 5, 7]
assert search(len(data), lambda i: data[i] >= 5) == 2
```