"""Traversal traces recorded by Fenwick tree operations.

A trace names the aggregate cells the most recent operation visited. Exactly
one trace is current at a time and every operation replaces it wholesale, so
the variants below are mutually exclusive by construction:

``EmptyTrace``
    Nothing highlighted (fresh structure, rebuild, resize).
``UpdateTrace``
    Cells a point update added its delta to, in visit order.
``QueryTrace``
    Cells a prefix-sum query accumulated, in visit order, plus the sum.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, Iterator, Literal, Tuple, Union

TraceKind = Literal["empty", "update", "query"]


@dataclass(frozen=True)
class _BaseTrace:
    indices: Tuple[int, ...] = ()

    kind: ClassVar[TraceKind] = "empty"

    def __contains__(self, index: object) -> bool:
        return index in self.indices

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices)

    def __len__(self) -> int:
        return len(self.indices)

    def is_empty(self) -> bool:
        return not self.indices


@dataclass(frozen=True)
class EmptyTrace(_BaseTrace):
    kind: ClassVar[TraceKind] = "empty"


@dataclass(frozen=True)
class UpdateTrace(_BaseTrace):
    kind: ClassVar[TraceKind] = "update"


@dataclass(frozen=True)
class QueryTrace(_BaseTrace):
    total: int = 0
    kind: ClassVar[TraceKind] = "query"


TraversalTrace = Union[EmptyTrace, UpdateTrace, QueryTrace]

EMPTY_TRACE = EmptyTrace()


def _as_indices(indices: Iterable[int]) -> Tuple[int, ...]:
    return tuple(int(idx) for idx in indices)


def update_trace(indices: Iterable[int]) -> UpdateTrace:
    return UpdateTrace(indices=_as_indices(indices))


def query_trace(indices: Iterable[int], total: int) -> QueryTrace:
    return QueryTrace(indices=_as_indices(indices), total=int(total))


def trace_total(trace: TraversalTrace) -> int:
    """Scalar shown next to the structure: the query sum, otherwise ``0``."""

    if isinstance(trace, QueryTrace):
        return trace.total
    return 0


__all__ = [
    "TraceKind",
    "TraversalTrace",
    "EmptyTrace",
    "UpdateTrace",
    "QueryTrace",
    "EMPTY_TRACE",
    "update_trace",
    "query_trace",
    "trace_total",
]
