"""Concurrent quicksort for lists of byte strings in lexicographic order."""

from __future__ import annotations

from typing import MutableSequence, Sequence

from .core import MAX_LEN_INS_FC, MAX_LEN_REC_FC
from .ordered import (
    _Kind,
    _median_of_three,
    _median_pivot_conc,
    _median_pivot_long,
    _resolve_max_gor,
    _sort_range,
)

_BYTES = _Kind(
    MAX_LEN_INS_FC, MAX_LEN_REC_FC, _median_of_three, _median_pivot_long, _median_pivot_conc
)

_BYTE_STRINGS = (bytes, bytearray)


def _check(ar: Sequence, caller: str) -> None:
    if isinstance(ar, (str, bytes, bytearray, memoryview)):
        raise TypeError(f"{caller}: expected a list of byte strings, got {type(ar).__name__}")
    for item in ar:
        if not isinstance(item, _BYTE_STRINGS):
            raise TypeError(
                f"{caller}: elements must be bytes or bytearray, got {type(item).__name__}"
            )


def is_sorted_bytes(ar: Sequence[bytes]) -> int:
    """Return 0 if ar is in ascending lexicographic order, else i > 0 with ar[i] < ar[i-1]."""
    _check(ar, "is_sorted_bytes")
    for i in range(len(ar) - 1, 0, -1):
        if ar[i] < ar[i - 1]:
            return i
    return 0


def sort_bytes(ar: MutableSequence[bytes], *, max_gor: int | None = None) -> None:
    """Sort a list of byte strings in place in ascending lexicographic order."""
    _check(ar, "sort_bytes")
    _sort_range(ar, 0, len(ar), _BYTES, _resolve_max_gor(max_gor))