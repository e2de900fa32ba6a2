"""Concurrent quicksort over any collection driven by a lesswap callback.

A lesswap function ``lsw(i, k, r, s)`` returns ``less(i, k)`` and, when that is
true and ``r != s``, swaps elements ``r`` and ``s`` of the collection.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Callable

from .core import (
    MAX_LEN_INS_FC,
    MAX_LEN_REC_FC,
    NS_CONC,
    NS_LONG,
    GoroutineQuota,
    Settings,
    mean,
    min_max_sample,
    settings,
)

Lesswap = Callable[[int, int, int, int], bool]


def is_sorted(n: int, lsw: Lesswap) -> int:
    """Return 0 if the collection of length n is sorted, else i > 0 with less(i, i-1)."""
    for i in range(n - 1, 0, -1):
        if lsw(i, i - 1, i, i):  # equal swap indices disable swapping
            return i
    return 0


def _insertion(lsw: Lesswap, lo: int, hi: int) -> None:
    for h in range(lo + 1, hi + 1):
        l = h
        while lsw(l, l - 1, l, l - 1):
            l -= 1
            if l <= lo:
                break


def _pivot(lsw: Lesswap, lo: int, hi: int, n: int) -> int:
    """Sort n samples in place, move one to each end, return the median position."""
    f, s, la = min_max_sample(hi + 1 - lo, n)
    first, step, last = lo + f, s, lo + la

    for h in range(first + step, last + 1, step):
        l = h
        while lsw(l, l - step, l, l - step):
            l -= step
            if l <= first:
                break

    lsw(first, lo, first, lo)
    lsw(hi, last, hi, last)
    return mean(first, last)


def _part_one(lsw: Lesswap, l: int, pv: int, h: int) -> int:
    while l < h:
        if lsw(h, pv, h, h):
            while not lsw(pv, l, h, l):
                l += 1
                if l >= h:
                    return l + 1
        elif lsw(pv, l, l, l):
            while True:
                h -= 1
                if l >= h:
                    return l
                if lsw(h, pv, h, l):
                    break
        l += 1
        h -= 1
    if l == h and h != pv and lsw(h, pv, h, h):  # classify mid element
        l += 1
    return l


def _part_two(lsw: Lesswap, lo: int, l: int, pv: int, h: int, hi: int) -> int:
    while True:
        if lsw(h, pv, h, h):
            while not lsw(pv, l, h, l):
                l -= 1
                if l < lo:
                    return h
        elif lsw(pv, l, l, l):
            while True:
                h += 1
                if h > hi:
                    return l
                if lsw(h, pv, h, l):
                    break
        l -= 1
        h += 1
        if l < lo:
            return h
        if h > hi:
            return l


def _in_thread(fn, *args) -> Future:
    fut: Future = Future()

    def run():
        try:
            fut.set_result(fn(*args))
        except BaseException as exc:  # handed back through the future
            fut.set_exception(exc)

    threading.Thread(target=run, daemon=True).start()
    return fut


def _part_con(lsw: Lesswap, lo: int, hi: int) -> int:
    pv = _pivot(lsw, lo, hi, NS_CONC - 1)
    lo += 1
    hi -= 1
    l, h = mean(lo, pv), mean(pv, hi)

    fut = _in_thread(_part_one, lsw, l + 1, pv, h - 1)  # middle half
    r = _part_two(lsw, lo, l, pv, h, hi)  # outer quarters
    k = fut.result()

    # only one gap is possible
    if r < pv:
        while lo <= r:
            if lsw(pv, r, k - 1, r):
                k -= 1
                if k == pv:  # pivot moved while closing the gap
                    pv = r
            r -= 1
    else:
        while r <= hi:
            if lsw(r, pv, r, k):
                if k == pv:  # pivot moved while closing the gap
                    pv = r
                k += 1
            r += 1
    return k


def _split(lo: int, l: int, hi: int):
    """Return (shorter lo, shorter hi, shorter span, longer lo, longer hi, longer span)."""
    h = l - 1
    no, n = h - lo, hi - l
    if no < n:
        return lo, h, no, l, hi, n
    return l, hi, n, lo, h, no


def _short(lsw: Lesswap, lo: int, hi: int) -> None:
    while True:
        fr, step, _ = min_max_sample(hi + 1 - lo, 3)
        first = lo + fr
        pv = first + step
        last = pv + step

        lsw(pv, first, pv, first)
        if lsw(last, pv, last, pv):
            lsw(pv, first, pv, first)  # median-of-3 pivot

        lsw(first, lo, first, lo)
        lsw(hi, last, hi, last)

        k = _part_one(lsw, lo + 1, pv, hi - 1)
        l, h, n, lo, hi, no = _split(lo, k, hi)

        if n >= MAX_LEN_INS_FC:
            _short(lsw, l, h)  # recurse on the shorter range
            continue
        _insertion(lsw, l, h)
        if no >= MAX_LEN_INS_FC:
            continue
        if lo != l:
            _insertion(lsw, lo, hi)
        return


def _worker(lsw: Lesswap, lo: int, hi: int, quota: GoroutineQuota) -> None:
    try:
        _long(lsw, lo, hi, quota)
    except BaseException as exc:  # re-raised by quota.wait()
        quota.errors.append(exc)
    finally:
        quota.release()


def _spawn(lsw: Lesswap, lo: int, hi: int, quota: GoroutineQuota) -> None:
    quota.acquire()
    threading.Thread(target=_worker, args=(lsw, lo, hi, quota), daemon=True).start()


def _long(lsw: Lesswap, lo: int, hi: int, quota: GoroutineQuota | None) -> None:
    while True:
        pv = _pivot(lsw, lo, hi, NS_LONG - 1)
        k = _part_one(lsw, lo + 1, pv, hi - 1)
        l, h, n, lo, hi, no = _split(lo, k, hi)

        if n < MAX_LEN_REC_FC:
            if n >= MAX_LEN_INS_FC:
                _short(lsw, l, h)
            else:
                _insertion(lsw, l, h)
            if no >= MAX_LEN_REC_FC:
                continue
            _short(lsw, lo, hi)
            return

        if quota is None or quota.full():
            _long(lsw, l, h, quota)  # recurse on the shorter range
            continue

        # both ranges are long: hand the longer one to a new worker
        _spawn(lsw, lo, hi, quota)
        lo, hi = l, h


def sort(n: int, lsw: Lesswap, *, max_gor: int | None = None) -> None:
    """Sort the collection of length n in place through lsw.

    max_gor bounds the number of concurrent workers, the caller included;
    it defaults to ``settings.max_gor``.
    """
    max_gor = settings.max_gor if max_gor is None else Settings(max_gor=max_gor).max_gor

    hi = n - 1
    if hi <= 2 * MAX_LEN_REC_FC or max_gor <= 1:
        if hi >= MAX_LEN_REC_FC:
            _long(lsw, 0, hi, None)
        elif hi >= MAX_LEN_INS_FC:
            _short(lsw, 0, hi)
        elif hi > 0:
            _insertion(lsw, 0, hi)
        return

    quota = GoroutineQuota(max_gor)
    lo = 0
    try:
        while True:
            k = _part_con(lsw, lo, hi)
            l, h, short_span, lo, hi, long_span = _split(lo, k, hi)

            if short_span >= MAX_LEN_REC_FC:
                _spawn(lsw, l, h, quota)
            elif short_span >= MAX_LEN_INS_FC:
                _short(lsw, l, h)
            else:
                _insertion(lsw, l, h)

            if long_span <= 2 * MAX_LEN_REC_FC or quota.full():
                break

        _long(lsw, lo, hi, quota)
    finally:
        quota.wait()