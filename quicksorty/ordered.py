"""Concurrent quicksort for lists of integers, floats and strings."""

from __future__ import annotations

import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, MutableSequence

from .core import (
    MAX_LEN_INS,
    MAX_LEN_INS_FC,
    MAX_LEN_REC,
    MAX_LEN_REC_FC,
    NS_CONC,
    NS_LONG,
    FloatOption,
    GoroutineQuota,
    Settings,
    mean,
    median3,
    median4,
    min_max_four,
    min_max_sample,
    settings,
)

PivotFn = Callable[[MutableSequence, int, int], Any]


@dataclass(frozen=True)
class _Kind:
    """Limits and pivot strategies for one element family."""

    max_ins: int
    max_rec: int
    short_pivot: PivotFn
    long_pivot: PivotFn
    conc_pivot: PivotFn


def _is_sorted_range(slc: MutableSequence, lo: int, hi: int) -> int:
    """Return 0 if slc[lo:hi] is ascending, else the offset i > 0 of the last descent."""
    for i in range(hi - 1, lo, -1):
        if not slc[i] >= slc[i - 1]:
            return i - lo
    return 0


def is_sorted_ordered(slc: MutableSequence) -> int:
    """Return 0 if slc is ascending, else i > 0 with slc[i] < slc[i-1] (or a NaN involved)."""
    return _is_sorted_range(slc, 0, len(slc))


def _resolve_nan_option(nan_option) -> FloatOption:
    return settings.nan_option if nan_option is None else FloatOption(nan_option)


def _resolve_max_gor(max_gor) -> int:
    return settings.max_gor if max_gor is None else Settings(max_gor=max_gor).max_gor


def is_sorted_floats(slc: MutableSequence, *, nan_option=None) -> int:
    """Return 0 if slc is ascending with NaNs placed per nan_option.

    Otherwise return i > 0, an offset into the part left after the NaNs at the
    end (NAN_LARGE) or the start (NAN_SMALL) are skipped, where that part descends
    or holds a NaN.
    """
    option = _resolve_nan_option(nan_option)
    lo, hi = 0, len(slc) - 1
    if option is FloatOption.NAN_LARGE:
        while lo <= hi and slc[hi] != slc[hi]:
            hi -= 1
    elif option is FloatOption.NAN_SMALL:
        while lo <= hi and slc[lo] != slc[lo]:
            lo += 1
    return _is_sorted_range(slc, lo, hi + 1)


def _insertion(slc: MutableSequence, lo: int, hi: int) -> None:
    for h in range(lo + 1, hi):
        val = slc[h]
        l = h
        while l > lo and val < slc[l - 1]:
            slc[l] = slc[l - 1]
            l -= 1
        if l != h:
            slc[l] = val


def _pivot_pair(slc: MutableSequence, lo: int, hi: int, n: int):
    """Sort n equidistant samples of slc[lo:hi] and return the middle two."""
    first, step, last = min_max_sample(hi - lo, n)
    a, b = slc[lo + first], slc[lo + last]
    if b < a:
        a, b = b, a
    sample = [a, *(slc[lo + first + i * step] for i in range(1, n - 1)), b]
    _insertion(sample, 0, n)
    m = n >> 1
    return sample[m - 1], sample[m]


def _part_one(slc: MutableSequence, lo: int, hi: int, pv) -> int:
    """Partition slc[lo:hi]; return k with slc[lo:k] <= pv <= slc[k:hi]."""
    l, h = lo, hi - 1
    while l < h:
        if pv <= slc[h]:
            if not pv < slc[l]:
                l += 1
                h -= 1
                continue
            while True:  # extend ranges in balance
                h -= 1
                if h <= l:
                    return l
                if slc[h] <= pv:
                    break
        else:
            while not pv <= slc[l]:
                l += 1
                if h <= l:
                    return l + 1
        slc[l], slc[h] = slc[h], slc[l]
        l += 1
        h -= 1
    if l == h and slc[h] < pv:  # classify mid element
        l += 1
    return l


def _part_two(slc: MutableSequence, lo: int, hi: int, l: int, h: int, pv) -> int:
    """Swap outward from the gap (l, h) until one side of slc[lo:hi] is consumed."""
    l -= 1
    while True:
        if l < lo:
            return h
        if h >= hi:
            return l
        if pv <= slc[h]:
            if not pv < slc[l]:
                l -= 1
                h += 1
                continue
            while True:
                h += 1
                if h >= hi:
                    return l
                if slc[h] <= pv:
                    break
        else:
            while not pv <= slc[l]:
                l -= 1
                if l < lo:
                    return h
        slc[l], slc[h] = slc[h], slc[l]
        l -= 1
        h += 1


def _in_thread(fn, *args) -> Future:
    fut: Future = Future()

    def run():
        try:
            fut.set_result(fn(*args))
        except BaseException as exc:  # handed back through the future
            fut.set_exception(exc)

    threading.Thread(target=run, daemon=True).start()
    return fut


def _part_con(slc: MutableSequence, lo: int, hi: int, pv) -> int:
    """Partition slc[lo:hi] with two threads; return the split index."""
    n = hi - lo
    half = n >> 1
    mid = lo + half
    l, h = lo + (half >> 1), lo + mean(half, n)

    fut = _in_thread(_part_one, slc, l, h, pv)  # middle half
    r = _part_two(slc, lo, hi, l, h, pv)  # outer quarters
    k = fut.result()

    # only one gap is possible
    if r < mid:
        while lo <= r:
            if pv < slc[r]:
                k -= 1
                slc[r], slc[k] = slc[k], slc[r]
            r -= 1
    else:
        while r < hi:
            if slc[r] < pv:
                slc[r], slc[k] = slc[k], slc[r]
                k += 1
            r += 1
    return k


def _split(lo: int, k: int, hi: int) -> tuple[int, int, int, int]:
    """Return (shorter lo, shorter hi, longer lo, longer hi) around k."""
    if k - lo < hi - k:
        return lo, k, k, hi
    return k, hi, lo, k


def _short(slc: MutableSequence, lo: int, hi: int, kind: _Kind) -> None:
    while True:
        pv = kind.short_pivot(slc, lo, hi)
        k = _part_one(slc, lo, hi, pv)
        slo, shi, lo, hi = _split(lo, k, hi)

        if shi - slo > kind.max_ins:
            _short(slc, slo, shi, kind)  # recurse on the shorter range
            continue
        _insertion(slc, slo, shi)
        if hi - lo > kind.max_ins:
            continue
        _insertion(slc, lo, hi)
        return


def _worker(slc: MutableSequence, lo: int, hi: int, kind: _Kind, quota: GoroutineQuota) -> None:
    try:
        _long(slc, lo, hi, kind, quota)
    except BaseException as exc:  # re-raised by quota.wait()
        quota.errors.append(exc)
    finally:
        quota.release()


def _spawn(slc: MutableSequence, lo: int, hi: int, kind: _Kind, quota: GoroutineQuota) -> None:
    quota.acquire()
    threading.Thread(target=_worker, args=(slc, lo, hi, kind, quota), daemon=True).start()


def _long(slc: MutableSequence, lo: int, hi: int, kind: _Kind, quota: GoroutineQuota | None) -> None:
    while True:
        pv = kind.long_pivot(slc, lo, hi)
        k = _part_one(slc, lo, hi, pv)
        slo, shi, lo, hi = _split(lo, k, hi)

        if shi - slo <= kind.max_rec:
            if shi - slo > kind.max_ins:
                _short(slc, slo, shi, kind)
            else:
                _insertion(slc, slo, shi)
            if hi - lo > kind.max_rec:
                continue
            _short(slc, lo, hi, kind)
            return

        if quota is None or quota.full():
            _long(slc, slo, shi, kind, quota)  # recurse on the shorter range
            continue

        # both ranges are long: hand the longer one to a new worker
        _spawn(slc, lo, hi, kind, quota)
        lo, hi = slo, shi


def _sort_range(slc: MutableSequence, lo: int, hi: int, kind: _Kind, max_gor: int) -> None:
    threshold = 2 * (kind.max_rec + 1)
    n = hi - lo
    if n < threshold or max_gor <= 1:
        if n > kind.max_rec:
            _long(slc, lo, hi, kind, None)
        elif n > kind.max_ins:
            _short(slc, lo, hi, kind)
        else:
            _insertion(slc, lo, hi)
        return

    quota = GoroutineQuota(max_gor)
    try:
        while True:
            pv = kind.conc_pivot(slc, lo, hi)
            k = _part_con(slc, lo, hi, pv)
            slo, shi, lo, hi = _split(lo, k, hi)

            if shi - slo > kind.max_rec:
                _spawn(slc, slo, shi, kind, quota)
            elif shi - slo > kind.max_ins:
                _short(slc, slo, shi, kind)
            else:
                _insertion(slc, slo, shi)

            if hi - lo < threshold or quota.full():
                break

        _long(slc, lo, hi, kind, quota)
    finally:
        quota.wait()


def _median_of_four(slc: MutableSequence, lo: int, hi: int):
    first, step = min_max_four(hi - lo)
    base = lo + first
    return median4(slc[base], slc[base + step], slc[base + 2 * step], slc[base + 3 * step])


def _median_of_three(slc: MutableSequence, lo: int, hi: int):
    first, step, last = min_max_sample(hi - lo, 3)
    return median3(slc[lo + first], slc[lo + first + step], slc[lo + last])


def _mean_pivot_long(slc: MutableSequence, lo: int, hi: int):
    return mean(*_pivot_pair(slc, lo, hi, NS_LONG))


def _mean_pivot_conc(slc: MutableSequence, lo: int, hi: int):
    return mean(*_pivot_pair(slc, lo, hi, NS_CONC))


def _median_pivot_long(slc: MutableSequence, lo: int, hi: int):
    return _pivot_pair(slc, lo, hi, NS_LONG - 1)[1]


def _median_pivot_conc(slc: MutableSequence, lo: int, hi: int):
    return _pivot_pair(slc, lo, hi, NS_CONC - 1)[1]


_INTS = _Kind(MAX_LEN_INS, MAX_LEN_REC, _median_of_four, _mean_pivot_long, _mean_pivot_conc)
_FLOATS = _Kind(MAX_LEN_INS, MAX_LEN_REC, _median_of_three, _median_pivot_long, _median_pivot_conc)
_STRINGS = _Kind(
    MAX_LEN_INS_FC, MAX_LEN_REC_FC, _median_of_three, _median_pivot_long, _median_pivot_conc
)


def sort_ints(ar: MutableSequence[int], *, max_gor: int | None = None) -> None:
    """Sort a list of integers in place, ascending, with up to max_gor workers."""
    _sort_range(ar, 0, len(ar), _INTS, _resolve_max_gor(max_gor))


def sort_strings(ar: MutableSequence[str], *, max_gor: int | None = None) -> None:
    """Sort a list of strings in place in ascending lexicographic order."""
    _sort_range(ar, 0, len(ar), _STRINGS, _resolve_max_gor(max_gor))


def sort_floats(
    ar: MutableSequence[float], *, nan_option=None, max_gor: int | None = None
) -> None:
    """Sort a list of floats in place, ascending, placing NaNs per nan_option.

    With NAN_IGNORE and NaNs present, the result is unspecified.
    """
    option = _resolve_nan_option(nan_option)
    workers = _resolve_max_gor(max_gor)
    lo, hi = 0, len(ar) - 1
    if option is FloatOption.NAN_LARGE:  # move NaNs to the end
        while lo <= hi:
            x = ar[hi]
            if x != x:
                hi -= 1
                continue
            y = ar[lo]
            if y != y:
                ar[lo], ar[hi] = x, y
                hi -= 1
            lo += 1
        lo = 0
    elif option is FloatOption.NAN_SMALL:  # move NaNs to the start
        while lo <= hi:
            y = ar[lo]
            if y != y:
                lo += 1
                continue
            x = ar[hi]
            if x != x:
                ar[lo], ar[hi] = x, y
                lo += 1
            hi -= 1
        hi = len(ar) - 1
    else:
        lo = 0
    _sort_range(ar, lo, hi + 1, _FLOATS, workers)