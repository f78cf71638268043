"""Index arithmetic for the 0-indexed Fenwick layout.

Aggregate cell ``i`` sums the logical values in ``(i - lowbit(i + 1), i]``.
Updates climb with ``i | (i + 1)``; queries descend with ``(i & (i + 1)) - 1``.
"""

from __future__ import annotations

from typing import Tuple


def lowbit(value: int) -> int:
    """Value of the lowest set bit of ``value`` (``0`` for ``0``)."""

    return value & -value


def trailing_zeros(value: int) -> int:
    if value <= 0:
        raise ValueError(f"trailing_zeros expects a positive integer, got {value}.")
    return lowbit(value).bit_length() - 1


def covered_range(index: int) -> Tuple[int, int]:
    """Half-open range of logical indices summed by aggregate cell ``index``."""

    if index < 0:
        raise ValueError(f"Aggregate index must be non-negative, got {index}.")
    stop = index + 1
    return stop - lowbit(stop), stop


def update_path(index: int, size: int) -> Tuple[int, ...]:
    """Aggregate cells a point update at ``index`` visits in a structure of ``size``."""

    path = []
    cur = index
    while 0 <= cur < size:
        path.append(cur)
        cur |= cur + 1
    return tuple(path)


def query_path(length: int) -> Tuple[int, ...]:
    """Aggregate cells a prefix-sum query over the first ``length`` values visits."""

    path = []
    cur = length - 1
    while cur >= 0:
        path.append(cur)
        cur = (cur & (cur + 1)) - 1
    return tuple(path)


__all__ = ["lowbit", "trailing_zeros", "covered_range", "update_path", "query_path"]
