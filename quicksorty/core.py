"""Shared tuning limits, sampling helpers and concurrency bookkeeping."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass
from typing import Callable

# Maximum slice length for insertion sort.
MAX_LEN_INS = 60
# Maximum slice length for insertion sort for strings and lesswap sorting.
MAX_LEN_INS_FC = 30
# Maximum slice length for recursion when there is worker quota.
MAX_LEN_REC = 600
# Maximum slice length for recursion for strings and lesswap sorting.
MAX_LEN_REC_FC = 300

# Number of samples in pivot selection for short, long and dual ranges.
NS_SHORT = 4
NS_LONG = 6
NS_CONC = 8

MAX_GOR_LIMIT = 4097

_FIRST_FOUR = (0, 0, -1, 0, 0, 1, 1, 0)
_STEP_FOUR = (0, 0, 1, 1, 0, 0, 0, 1)


class FloatOption(enum.IntEnum):
    """How NaNs are ordered relative to other float values."""

    NAN_SMALL = -1
    NAN_IGNORE = 0
    NAN_LARGE = 1


@dataclass
class Settings:
    """Process-wide defaults; values are validated on every assignment."""

    max_gor: int = 3
    nan_option: FloatOption = FloatOption.NAN_LARGE

    def __setattr__(self, name, value):
        if name == "max_gor":
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"max_gor must be an int, got {type(value).__name__}")
            if not 0 < value < MAX_GOR_LIMIT:
                raise ValueError(f"max_gor must be in [1, {MAX_GOR_LIMIT - 1}], got {value}")
        elif name == "nan_option":
            value = FloatOption(value)
        super().__setattr__(name, value)


settings = Settings()


class GoroutineQuota:
    """Counts sorting workers (the caller included) of one sort call.

    Worker failures are appended to ``errors`` and re-raised by ``wait``.
    """

    def __init__(self, max_gor: int) -> None:
        self.max_gor = max_gor
        self.errors: list[BaseException] = []
        self._count = 1
        self._lock = threading.Lock()
        self._done = threading.Event()

    def full(self) -> bool:
        """Return True when no further worker may be started."""
        return self._count >= self.max_gor

    def acquire(self) -> None:
        """Account for one more running worker."""
        with self._lock:
            self._count += 1

    def release(self) -> bool:
        """Account for a finished worker; return True if it was the last one."""
        with self._lock:
            self._count -= 1
            last = self._count == 0
        if last:
            self._done.set()
        return last

    def wait(self) -> None:
        """Release the caller's own slot and block until all workers are done."""
        self.release()
        self._done.wait()
        if self.errors:
            raise self.errors[0]


def search(n: int, fn: Callable[[int], bool]) -> int:
    """Return the lowest k in [0, n) with fn(k) true, or n if there is none.

    Assumes fn(k) implies fn(k + 1).
    """
    lo, hi = 0, n
    while lo < hi:
        m = mean(lo, hi)
        if fn(m):
            hi = m
        else:
            lo = m + 1
    return lo


def min_max_sample(slen: int, n: int) -> tuple[int, int, int]:
    """Choose n equidistant sample positions minimising the distance to the rest.

    Returns (first, step, last). Requires n >= 2 and slen >= 2 * n.
    """
    if n < 2 or slen < 2 * n:
        raise ValueError(f"need n >= 2 and slen >= 2n, got slen={slen}, n={n}")
    step = slen // n
    n -= 1
    span = n * step
    tail = slen - span  # 1 + members in both tails
    if tail > n and tail >> 1 > (step + 1) >> 1:
        step += 1
        span += n
        tail -= n
    first = tail >> 1  # larger tail
    return first, step, first + span


def min_max_four(slen: int) -> tuple[int, int]:
    """Return (first, step) of min_max_sample(slen, 4). Requires slen >= 8."""
    if slen < 8:
        raise ValueError(f"need slen >= 8, got {slen}")
    mod = slen & 7
    return (slen >> 3) + _FIRST_FOUR[mod], (slen >> 2) + _STEP_FOUR[mod]


def mean(a: int, b: int) -> int:
    """Floor of the average of two integers."""
    return (a + b) // 2


def median3(a, b, c):
    """Median of three comparable values."""
    return sorted((a, b, c))[1]


def median4(a: int, b: int, c: int, d: int) -> int:
    """Floor mean of the two middle values of four integers."""
    s = sorted((a, b, c, d))
    return mean(s[1], s[2])