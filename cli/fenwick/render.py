from __future__ import annotations

from typing import List

from fenwicktrace import FenwickState, build_layout, highlight_for

COLUMN_WIDTH = 8

_MARKERS = {"update": "*", "query": "?", None: ""}


def _boxed(text: str, span: int) -> str:
    return "[" + text.rjust(span * COLUMN_WIDTH - 2) + "]"


def render_grid(state: FenwickState) -> str:
    """Text rendition of the aggregate grid, the values row and the index row.

    Aggregate cells on the current update path end in ``*``; cells on the
    current query path end in ``?``.
    """

    lines: List[str] = []
    for row in build_layout(state.size):
        parts = []
        for cell in row:
            if cell is None:
                parts.append(" " * COLUMN_WIDTH)
                continue
            marker = _MARKERS[highlight_for(cell.index, state.trace)]
            parts.append(_boxed(f"{int(state.aggregates[cell.index])}{marker}", cell.span))
        lines.append("".join(parts).rstrip())
    lines.append("".join(_boxed(str(int(value)), 1) for value in state.values))
    lines.append("".join(str(index).rjust(COLUMN_WIDTH) for index in range(state.size)))
    return "\n".join(lines)


def describe_trace(state: FenwickState) -> str:
    trace = state.trace
    if trace.kind == "empty":
        return "no trace"
    indices = ", ".join(str(index) for index in trace.indices) or "-"
    return f"{trace.kind} trace: {indices}"


__all__ = ["COLUMN_WIDTH", "render_grid", "describe_trace"]
