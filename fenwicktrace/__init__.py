"""fenwicktrace: Fenwick tree engine with traversal traces.

Quick Start
-----------
>>> from fenwicktrace import FenwickTree
>>>
>>> tree = FenwickTree.from_values([1, 2, 3, 4])
>>> tree.aggregates.tolist()
[1, 3, 3, 10]
>>> total, trace = tree.prefix_sum(4)
>>> total, trace.indices
(10, (3,))
>>> tree.point_update(2, 5).indices
(2, 3)

Classes
-------
FenwickTree : Mutable owner of the values, aggregate store and latest trace.
FenwickState : Immutable snapshot that copy-on-write operations produce.
TraversalTrace : ``EmptyTrace | UpdateTrace | QueryTrace``.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("fenwicktrace")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.1.0"

from .core import (
    EMPTY_TRACE,
    EmptyTrace,
    FenwickError,
    FenwickState,
    FenwickTree,
    InvalidIndex,
    InvalidLength,
    InvalidResizeLength,
    QueryTrace,
    TraversalTrace,
    UpdateTrace,
)
from .algo import LayoutCell, build_layout, covered_range, highlight_for, lowbit

__all__ = [
    "__version__",
    "FenwickTree",
    "FenwickState",
    "TraversalTrace",
    "EmptyTrace",
    "UpdateTrace",
    "QueryTrace",
    "EMPTY_TRACE",
    "FenwickError",
    "InvalidIndex",
    "InvalidLength",
    "InvalidResizeLength",
    "LayoutCell",
    "build_layout",
    "covered_range",
    "highlight_for",
    "lowbit",
]
