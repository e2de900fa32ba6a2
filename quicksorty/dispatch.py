"""Pick the right sorter for a homogeneous list by looking at its elements."""

from __future__ import annotations

import enum
from typing import Any, MutableSequence, Sequence

from .bytesort import is_sorted_bytes, sort_bytes
from .core import FloatOption, Settings
from .ordered import (
    is_sorted_floats,
    is_sorted_ordered,
    sort_floats,
    sort_ints,
    sort_strings,
)


class _Family(enum.Enum):
    INT = "int"
    FLOAT = "float"
    STR = "str"
    BYTES = "bytes"


def _element_family(item: Any) -> _Family | None:
    if isinstance(item, bool):
        return None
    if isinstance(item, int):
        return _Family.INT
    if isinstance(item, float):
        return _Family.FLOAT
    if isinstance(item, str):
        return _Family.STR
    if isinstance(item, (bytes, bytearray)):
        return _Family.BYTES
    return None


def _family(ar: Sequence, caller: str) -> _Family | None:
    """Return the element family of ar, None when empty; raise TypeError otherwise."""
    if isinstance(ar, (str, bytes, bytearray, memoryview)) or not (
        hasattr(ar, "__len__") and hasattr(ar, "__getitem__")
    ):
        raise TypeError(f"{caller}: invalid input type {type(ar).__name__}")
    found: _Family | None = None
    for item in ar:
        family = _element_family(item)
        if family is None:
            raise TypeError(f"{caller}: invalid element type {type(item).__name__}")
        if found is None:
            found = family
        elif family is not found:
            raise TypeError(
                f"{caller}: mixed element types {found.value} and {family.value}"
            )
    return found


def is_sorted_slice(ar: Sequence, *, nan_option=None) -> int:
    """Return 0 if ar is ascending, otherwise i > 0 with ar[i] < ar[i-1].

    ar holds only ints, only floats, only strings or only byte strings;
    anything else raises TypeError. Floats honour nan_option.
    """
    if nan_option is not None:
        nan_option = FloatOption(nan_option)
    family = _family(ar, "is_sorted_slice")
    if family is _Family.FLOAT:
        return is_sorted_floats(ar, nan_option=nan_option)
    if family is _Family.BYTES:
        return is_sorted_bytes(ar)
    if family is None:
        return 0
    return is_sorted_ordered(ar)


def sort_slice(ar: MutableSequence, *, nan_option=None, max_gor: int | None = None) -> None:
    """Sort ar in place in ascending order with up to max_gor workers.

    ar holds only ints, only floats, only strings or only byte strings;
    anything else raises TypeError. Floats place NaNs per nan_option.
    """
    if nan_option is not None:
        nan_option = FloatOption(nan_option)
    if max_gor is not None:
        max_gor = Settings(max_gor=max_gor).max_gor
    family = _family(ar, "sort_slice")
    if family is _Family.INT:
        sort_ints(ar, max_gor=max_gor)
    elif family is _Family.FLOAT:
        sort_floats(ar, nan_option=nan_option, max_gor=max_gor)
    elif family is _Family.STR:
        sort_strings(ar, max_gor=max_gor)
    elif family is _Family.BYTES:
        sort_bytes(ar, max_gor=max_gor)