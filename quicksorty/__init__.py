"""In-place quicksort, optionally threaded, for lists, by-length ordering and lesswap-driven collections."""

__version__ = "2.0.0"
__all__ = ["core", "lesswap", "ordered", "bytesort", "bylen", "dispatch"]