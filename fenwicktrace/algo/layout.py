from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

from fenwicktrace.algo.bits import covered_range, trailing_zeros
from fenwicktrace.core.trace import QueryTrace, TraversalTrace, UpdateTrace

Highlight = Literal["query", "update"]


@dataclass(frozen=True)
class LayoutCell:
    """Aggregate cell placed in the grid; it spans the columns it summarises."""

    index: int
    span: int

    @property
    def start(self) -> int:
        return self.index + 1 - self.span

    @property
    def stop(self) -> int:
        return self.index + 1


LayoutRow = Tuple[Optional[LayoutCell], ...]


def cell_row(index: int) -> int:
    """Row of aggregate cell ``index``: the number of trailing zeros of ``index + 1``."""

    return trailing_zeros(index + 1)


def build_layout(length: int) -> Tuple[LayoutRow, ...]:
    """Arrange aggregate cells into rows ordered from the leaves upwards.

    Each row has one entry per column not covered by a wider cell. A cell of
    row ``r`` spans ``2**r`` columns ending at its own index; columns with no
    cell in that row hold ``None``.
    """

    if length < 0:
        raise ValueError(f"Layout length must be non-negative, got {length}.")
    if length == 0:
        return ()

    levels = [cell_row(index) for index in range(length)]
    rows: List[LayoutRow] = []
    for row in range(max(levels) + 1):
        entries: List[Optional[LayoutCell]] = []
        for index in range(length):
            if levels[index] == row:
                start, stop = covered_range(index)
                span = stop - start
                # The cell absorbs the gap columns to its left.
                del entries[len(entries) - (span - 1):]
                entries.append(LayoutCell(index=index, span=span))
            else:
                entries.append(None)
        rows.append(tuple(entries))
    return tuple(rows)


def highlight_for(index: int, trace: TraversalTrace) -> Highlight | None:
    if isinstance(trace, QueryTrace) and index in trace:
        return "query"
    if isinstance(trace, UpdateTrace) and index in trace:
        return "update"
    return None


__all__ = ["Highlight", "LayoutCell", "LayoutRow", "cell_row", "build_layout", "highlight_for"]
