from __future__ import annotations

import threading
from typing import Any, Dict, Iterable, Tuple, cast

import numpy as np

from fenwicktrace.algo.kernels import KernelSet, select_kernels
from fenwicktrace.core import persistence
from fenwicktrace.core.state import FenwickState
from fenwicktrace.core.trace import QueryTrace, TraversalTrace, UpdateTrace
from fenwicktrace.logging import get_logger

LOGGER = get_logger("core.tree")


class FenwickTree:
    """Dynamic array with logarithmic point updates and prefix sums.

    The tree owns a single :class:`FenwickState` and replaces it wholesale on
    every operation, under a lock, so concurrent readers always see values,
    aggregates and trace that belong together. The most recent operation's
    traversal is available as :attr:`trace`.

    Parameters
    ----------
    length:
        Initial number of elements (at least 1).
    fill:
        Initial value of every element.
    kernels:
        Kernel set to run traversals with; defaults to the runtime config.
    """

    def __init__(
        self,
        length: int = 1,
        fill: int = 0,
        *,
        kernels: KernelSet | None = None,
    ) -> None:
        self._kernels = kernels or select_kernels()
        self._lock = threading.Lock()
        self._state = persistence.construct_state(length, fill, kernels=self._kernels)

    @classmethod
    def from_values(
        cls,
        values: Iterable[int] | np.ndarray,
        *,
        kernels: KernelSet | None = None,
    ) -> "FenwickTree":
        tree = cls(kernels=kernels)
        tree.rebuild(values)
        return tree

    # ------------------------------------------------------------------
    # Read-only views

    @property
    def state(self) -> FenwickState:
        return self._state

    @property
    def kernels(self) -> KernelSet:
        return self._kernels

    @property
    def values(self) -> np.ndarray:
        return self._state.values

    @property
    def aggregates(self) -> np.ndarray:
        return self._state.aggregates

    @property
    def trace(self) -> TraversalTrace:
        return self._state.trace

    @property
    def last_sum(self) -> int:
        return self._state.last_sum

    def __len__(self) -> int:
        return self._state.size

    def __repr__(self) -> str:
        return (
            f"FenwickTree(values={self._state.values.tolist()}, "
            f"trace={self._state.trace.kind})"
        )

    def materialise(self) -> Dict[str, Any]:
        return self._state.materialise()

    # ------------------------------------------------------------------
    # Operations

    def point_update(self, index: int, value: int) -> UpdateTrace:
        """Set element ``index`` to ``value``; returns the update trace."""

        with self._lock:
            self._state = persistence.point_update_state(
                self._state, index, value, kernels=self._kernels
            )
            trace = cast(UpdateTrace, self._state.trace)
        return trace

    def prefix_sum(self, length: int) -> Tuple[int, QueryTrace]:
        """Sum of the first ``length`` elements together with the query trace."""

        with self._lock:
            self._state = persistence.prefix_sum_state(
                self._state, length, kernels=self._kernels
            )
            trace = cast(QueryTrace, self._state.trace)
        return trace.total, trace

    def rebuild(self, values: Iterable[int] | np.ndarray) -> None:
        """Replace every element and recompute the aggregates; clears the trace."""

        with self._lock:
            self._state = persistence.rebuild_state(values, kernels=self._kernels)

    def resize(self, new_length: int) -> None:
        """Grow with zeros or truncate (discarding the tail), then rebuild."""

        with self._lock:
            self._state = persistence.resize_state(
                self._state, new_length, kernels=self._kernels
            )
        LOGGER.debug("Tree resized to %d elements", len(self))

    def range_sum(self, start: int, stop: int) -> int:
        """Sum of elements ``[start, stop)``; leaves the current trace alone."""

        state = self._state
        return persistence.range_sum(state, start, stop, kernels=self._kernels)

    # Names used by interactive callers.
    set_value = point_update
    query_sum = prefix_sum


__all__ = ["FenwickTree"]
