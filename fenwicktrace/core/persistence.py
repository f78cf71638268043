"""Copy-on-write operations over :class:`FenwickState`.

Each function validates its inputs, then builds a complete new state; the
state passed in is never modified. Rejected calls raise before any array is
allocated.
"""

from __future__ import annotations

import operator
from typing import Any, Iterable

import numpy as np

from fenwicktrace import config as fw_config
from fenwicktrace.algo.kernels import KernelSet, add_inplace, prefix_walk, recompute
from fenwicktrace.core.errors import InvalidIndex, InvalidLength, InvalidResizeLength
from fenwicktrace.core.state import FenwickState
from fenwicktrace.core.trace import EMPTY_TRACE, query_trace, update_trace
from fenwicktrace.logging import get_logger, log_traversal

LOGGER = get_logger("core.persistence")


def _as_int(value: Any, *, name: str) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"{name} must be an integer, got bool.")
    try:
        return operator.index(value)
    except TypeError as exc:
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}.") from exc


def _check_structure_length(length: int) -> None:
    runtime = fw_config.runtime_config()
    if length < 1 or not runtime.allows_length(length):
        LOGGER.debug("Rejected structure length %d", length)
        raise InvalidLength(length, lower=1, upper=runtime.max_length)


def construct_state(
    length: int = 1,
    fill: int = 0,
    *,
    kernels: KernelSet | None = None,
) -> FenwickState:
    """State holding ``length`` copies of ``fill`` with a matching aggregate store."""

    length = _as_int(length, name="length")
    fill = _as_int(fill, name="fill")
    _check_structure_length(length)
    return rebuild_state(np.full(length, fill, dtype=np.int64), kernels=kernels)


def rebuild_state(
    values: Iterable[int] | np.ndarray,
    *,
    kernels: KernelSet | None = None,
) -> FenwickState:
    """Recompute the aggregate store for ``values`` from scratch.

    Each value is added along its update path into an all-zero store in
    increasing index order, so the result matches a sequence of point updates
    applied to a zero array. The returned state carries no trace.
    """

    raw = np.asarray(values if isinstance(values, np.ndarray) else list(values))
    if raw.size and raw.dtype.kind not in "iuO":
        raise TypeError(f"rebuild expects integer values, got dtype {raw.dtype}.")
    if raw.size and raw.dtype.kind == "u" and int(raw.max()) > np.iinfo(np.int64).max:
        raise OverflowError(f"rebuild value {int(raw.max())} does not fit in int64.")
    values_np = np.array(raw, dtype=np.int64)
    if values_np.ndim != 1:
        raise ValueError(f"rebuild expects a 1-D sequence, got shape {values_np.shape}.")
    _check_structure_length(int(values_np.shape[0]))

    aggregates = recompute(values_np, kernels=kernels)
    LOGGER.debug("Rebuilt aggregate store for %d values", values_np.shape[0])
    return FenwickState(values=values_np, aggregates=aggregates, trace=EMPTY_TRACE)


def point_update_state(
    state: FenwickState,
    index: int,
    value: int,
    *,
    kernels: KernelSet | None = None,
) -> FenwickState:
    """Set ``values[index]`` to ``value`` and record the cells the delta reached.

    A zero delta still walks the update path, so the trace always shows it.
    """

    index = _as_int(index, name="index")
    value = _as_int(value, name="value")
    size = state.size
    if not 0 <= index < size:
        LOGGER.debug("Rejected point update at index %d (size %d)", index, size)
        raise InvalidIndex(index, size=size)

    values = np.array(state.values, dtype=np.int64, copy=True)
    aggregates = np.array(state.aggregates, dtype=np.int64, copy=True)
    delta = value - int(values[index])
    values[index] = value
    trace = update_trace(add_inplace(aggregates, index, delta, kernels=kernels))
    log_traversal(LOGGER, "Point update", trace, index=index, delta=delta)
    return FenwickState(values=values, aggregates=aggregates, trace=trace)


def prefix_sum_state(
    state: FenwickState,
    length: int,
    *,
    kernels: KernelSet | None = None,
) -> FenwickState:
    """Sum the first ``length`` values; the total rides on the returned query trace."""

    length = _as_int(length, name="length")
    size = state.size
    if not 0 <= length <= size:
        LOGGER.debug("Rejected prefix sum of length %d (size %d)", length, size)
        raise InvalidLength(length, lower=0, upper=size)

    total, path = prefix_walk(state.aggregates, length, kernels=kernels)
    trace = query_trace(path, total)
    log_traversal(LOGGER, "Prefix sum", trace, length=length, total=total)
    return state.replace(trace=trace)


def range_sum(
    state: FenwickState,
    start: int,
    stop: int,
    *,
    kernels: KernelSet | None = None,
) -> int:
    """Sum of ``values[start:stop]`` from two prefix walks; ``state`` is untouched."""

    start = _as_int(start, name="start")
    stop = _as_int(stop, name="stop")
    size = state.size
    if not 0 <= stop <= size:
        raise InvalidLength(stop, lower=0, upper=size)
    if not 0 <= start <= stop:
        raise InvalidLength(start, lower=0, upper=stop)
    upper, _ = prefix_walk(state.aggregates, stop, kernels=kernels)
    lower, _ = prefix_walk(state.aggregates, start, kernels=kernels)
    return upper - lower


def resize_state(
    state: FenwickState,
    new_length: int,
    *,
    kernels: KernelSet | None = None,
) -> FenwickState:
    """Grow with zeros or truncate, then rebuild.

    Truncated values are discarded; growing again later yields zeros in their
    place. Resizing to the current length still clears the trace.
    """

    new_length = _as_int(new_length, name="new_length")
    runtime = fw_config.runtime_config()
    if new_length < 1 or not runtime.allows_length(new_length):
        LOGGER.debug("Rejected resize to %d", new_length)
        raise InvalidResizeLength(new_length, max_length=runtime.max_length)

    size = state.size
    if new_length > size:
        values = np.concatenate(
            [state.values, np.zeros(new_length - size, dtype=np.int64)]
        )
    else:
        values = state.values[:new_length]
    LOGGER.debug("Resize %d -> %d", size, new_length)
    return rebuild_state(values, kernels=kernels)


__all__ = [
    "construct_state",
    "rebuild_state",
    "point_update_state",
    "prefix_sum_state",
    "range_sum",
    "resize_state",
]
