from __future__ import annotations


class FenwickError(ValueError):
    """Base class for rejected Fenwick tree operations.

    Every subclass is raised before any state is built, so the structure that
    rejected the call is left exactly as it was.
    """


class InvalidLength(FenwickError):
    """Raised when a construction or prefix length falls outside its domain."""

    def __init__(self, length: int, *, lower: int, upper: int | None) -> None:
        self.length = length
        self.lower = lower
        self.upper = upper
        bound = "inf" if upper is None else str(upper)
        super().__init__(f"Length {length} outside [{lower}, {bound}].")


class InvalidIndex(FenwickError, IndexError):
    """Raised when a point update targets an index outside ``[0, n)``."""

    def __init__(self, index: int, *, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Index {index} outside [0, {size}).")


class InvalidResizeLength(FenwickError):
    """Raised when a resize target is below one (or above the configured cap)."""

    def __init__(self, length: int, *, max_length: int | None = None) -> None:
        self.length = length
        self.max_length = max_length
        if max_length is None:
            message = f"Resize length must be at least 1, got {length}."
        else:
            message = f"Resize length must be within [1, {max_length}], got {length}."
        super().__init__(message)


__all__ = ["FenwickError", "InvalidLength", "InvalidIndex", "InvalidResizeLength"]
