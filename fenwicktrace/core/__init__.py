"""Core data structures and persistence primitives for the Fenwick tree."""

from .errors import FenwickError, InvalidIndex, InvalidLength, InvalidResizeLength
from .persistence import (
    construct_state,
    point_update_state,
    prefix_sum_state,
    range_sum,
    rebuild_state,
    resize_state,
)
from .state import FenwickState
from .trace import EMPTY_TRACE, EmptyTrace, QueryTrace, TraversalTrace, UpdateTrace
from .tree import FenwickTree

__all__ = [
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
    "construct_state",
    "rebuild_state",
    "point_update_state",
    "prefix_sum_state",
    "range_sum",
    "resize_state",
]
