"""Concurrent quicksort of sized items (strings, lists, ...) by their length."""

from __future__ import annotations

from collections.abc import Sized
from typing import MutableSequence, Sequence

from .core import (
    MAX_LEN_INS,
    MAX_LEN_REC,
    NS_CONC,
    NS_LONG,
    GoroutineQuota,
    mean,
    median4,
    min_max_four,
    min_max_sample,
)
from .ordered import _in_thread, _resolve_max_gor, _split


def _check(ar: Sequence, caller: str) -> None:
    if isinstance(ar, (str, bytes, bytearray, memoryview)):
        raise TypeError(f"{caller}: expected a list of sized items, got {type(ar).__name__}")
    for item in ar:
        if not isinstance(item, Sized):
            raise TypeError(f"{caller}: elements must have a length, got {type(item).__name__}")


def is_sorted_len(ar: Sequence[Sized]) -> int:
    """Return 0 if ar is ascending by length, else i > 0 with len(ar[i]) < len(ar[i-1])."""
    _check(ar, "is_sorted_len")
    for i in range(len(ar) - 1, 0, -1):
        if len(ar[i]) < len(ar[i - 1]):
            return i
    return 0


def _insertion(slc: MutableSequence, lo: int, hi: int) -> None:
    for h in range(lo + 1, hi):
        val = slc[h]
        key = len(val)
        l = h
        while l > lo and key < len(slc[l - 1]):
            slc[l] = slc[l - 1]
            l -= 1
        if l != h:
            slc[l] = val


def _pivot(slc: MutableSequence, lo: int, hi: int, n: int) -> int:
    """Mean of the two middle lengths among n equidistant samples of slc[lo:hi]."""
    first, step, _ = min_max_sample(hi - lo, n)
    lengths = sorted(len(slc[lo + first + i * step]) for i in range(n))
    m = n >> 1
    return mean(lengths[m - 1], lengths[m])


def _short_pivot(slc: MutableSequence, lo: int, hi: int) -> int:
    first, step = min_max_four(hi - lo)
    base = lo + first
    return median4(
        len(slc[base]), len(slc[base + step]), len(slc[base + 2 * step]), len(slc[base + 3 * step])
    )


def _part_one(slc: MutableSequence, lo: int, hi: int, pv: int) -> int:
    """Partition slc[lo:hi]; return k with lengths of slc[lo:k] <= pv <= slc[k:hi]."""
    l, h = lo, hi - 1
    while l < h:
        if pv <= len(slc[h]):
            if not pv < len(slc[l]):
                l += 1
                h -= 1
                continue
            while True:  # extend ranges in balance
                h -= 1
                if h <= l:
                    return l
                if len(slc[h]) <= pv:
                    break
        else:
            while not pv <= len(slc[l]):
                l += 1
                if h <= l:
                    return l + 1
        slc[l], slc[h] = slc[h], slc[l]
        l += 1
        h -= 1
    if l == h and len(slc[h]) < pv:  # classify mid element
        l += 1
    return l


def _part_two(slc: MutableSequence, lo: int, hi: int, l: int, h: int, pv: int) -> int:
    """Swap outward from the gap (l, h) until one side of slc[lo:hi] is consumed."""
    l -= 1
    while True:
        if l < lo:
            return h
        if h >= hi:
            return l
        if pv <= len(slc[h]):
            if not pv < len(slc[l]):
                l -= 1
                h += 1
                continue
            while True:
                h += 1
                if h >= hi:
                    return l
                if len(slc[h]) <= pv:
                    break
        else:
            while not pv <= len(slc[l]):
                l -= 1
                if l < lo:
                    return h
        slc[l], slc[h] = slc[h], slc[l]
        l -= 1
        h += 1


def _part_con(slc: MutableSequence, lo: int, hi: int) -> int:
    """Partition slc[lo:hi] by length with two threads; return the split index."""
    pv = _pivot(slc, lo, hi, NS_CONC)
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
            if pv < len(slc[r]):
                k -= 1
                slc[r], slc[k] = slc[k], slc[r]
            r -= 1
    else:
        while r < hi:
            if len(slc[r]) < pv:
                slc[r], slc[k] = slc[k], slc[r]
                k += 1
            r += 1
    return k


def _short(slc: MutableSequence, lo: int, hi: int) -> None:
    while True:
        pv = _short_pivot(slc, lo, hi)
        k = _part_one(slc, lo, hi, pv)
        slo, shi, lo, hi = _split(lo, k, hi)

        if shi - slo > MAX_LEN_INS:
            _short(slc, slo, shi)  # recurse on the shorter range
            continue
        _insertion(slc, slo, shi)
        if hi - lo > MAX_LEN_INS:
            continue
        _insertion(slc, lo, hi)
        return


def _worker(slc: MutableSequence, lo: int, hi: int, quota: GoroutineQuota) -> None:
    try:
        _long(slc, lo, hi, quota)
    except BaseException as exc:  # re-raised by quota.wait()
        quota.errors.append(exc)
    finally:
        quota.release()


def _spawn(slc: MutableSequence, lo: int, hi: int, quota: GoroutineQuota) -> None:
    import threading

    quota.acquire()
    threading.Thread(target=_worker, args=(slc, lo, hi, quota), daemon=True).start()


def _long(slc: MutableSequence, lo: int, hi: int, quota: GoroutineQuota | None) -> None:
    while True:
        pv = _pivot(slc, lo, hi, NS_LONG)
        k = _part_one(slc, lo, hi, pv)
        slo, shi, lo, hi = _split(lo, k, hi)

        if shi - slo <= MAX_LEN_REC:
            if shi - slo > MAX_LEN_INS:
                _short(slc, slo, shi)
            else:
                _insertion(slc, slo, shi)
            if hi - lo > MAX_LEN_REC:
                continue
            _short(slc, lo, hi)
            return

        if quota is None or quota.full():
            _long(slc, slo, shi, quota)  # recurse on the shorter range
            continue

        # both ranges are long: hand the longer one to a new worker
        _spawn(slc, lo, hi, quota)
        lo, hi = slo, shi


def sort_len(ar: MutableSequence[Sized], *, max_gor: int | None = None) -> None:
    """Sort a list of sized items in place by ascending length, with up to max_gor workers."""
    _check(ar, "sort_len")
    workers = _resolve_max_gor(max_gor)
    threshold = 2 * (MAX_LEN_REC + 1)
    lo, hi = 0, len(ar)

    if hi - lo < threshold or workers <= 1:
        if hi - lo > MAX_LEN_REC:
            _long(ar, lo, hi, None)
        elif hi - lo > MAX_LEN_INS:
            _short(ar, lo, hi)
        else:
            _insertion(ar, lo, hi)
        return

    quota = GoroutineQuota(workers)
    try:
        while True:
            k = _part_con(ar, lo, hi)
            slo, shi, lo, hi = _split(lo, k, hi)

            if shi - slo > MAX_LEN_REC:
                _spawn(ar, slo, shi, quota)
            elif shi - slo > MAX_LEN_INS:
                _short(ar, slo, shi)
            else:
                _insertion(ar, slo, shi)

            if hi - lo < threshold or quota.full():
                break

        _long(ar, lo, hi, quota)
    finally:
        quota.wait()