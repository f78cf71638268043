from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Tuple

import numpy as np
from numba import njit

from fenwicktrace import config as fw_config

# Longest possible walk over an int64-indexed store.
_PATH_CAPACITY = 64


def _add_inplace_impl(data, index, delta, path):
    size = data.shape[0]
    count = 0
    cur = index
    while cur < size:
        data[cur] += delta
        path[count] = cur
        count += 1
        cur |= cur + 1
    return count


def _prefix_walk_impl(data, length, path):
    total = 0
    count = 0
    cur = length - 1
    while cur >= 0:
        total += data[cur]
        path[count] = cur
        count += 1
        cur = (cur & (cur + 1)) - 1
    return total, count


def _recompute_impl(values, data):
    size = values.shape[0]
    for idx in range(size):
        data[idx] = 0
    for idx in range(size):
        delta = values[idx]
        cur = idx
        while cur < size:
            data[cur] += delta
            cur |= cur + 1


@dataclass(frozen=True)
class KernelSet:
    """Bundle of traversal kernels sharing one calling convention."""

    name: str
    add_inplace: Callable[..., Any]
    prefix_walk: Callable[..., Any]
    recompute: Callable[..., Any]


PYTHON_KERNELS = KernelSet(
    name="python",
    add_inplace=_add_inplace_impl,
    prefix_walk=_prefix_walk_impl,
    recompute=_recompute_impl,
)

NUMBA_KERNELS = KernelSet(
    name="numba",
    add_inplace=njit(cache=True)(_add_inplace_impl),
    prefix_walk=njit(cache=True)(_prefix_walk_impl),
    recompute=njit(cache=True)(_recompute_impl),
)

_KERNELS = {kernels.name: kernels for kernels in (PYTHON_KERNELS, NUMBA_KERNELS)}


def select_kernels(name: str | None = None) -> KernelSet:
    """Return the kernel set named ``name`` or the one the runtime config enables."""

    if name is None:
        name = fw_config.runtime_config().kernel
    try:
        return _KERNELS[name]
    except KeyError as exc:
        raise ValueError(
            f"Unknown kernel set '{name}'. Expected one of {sorted(_KERNELS)}."
        ) from exc


def _path_buffer() -> np.ndarray:
    return np.empty(_PATH_CAPACITY, dtype=np.int64)


def add_inplace(
    data: np.ndarray,
    index: int,
    delta: int,
    *,
    kernels: KernelSet | None = None,
) -> Tuple[int, ...]:
    """Add ``delta`` along the update path of ``index`` and return the cells visited."""

    kernels = kernels or select_kernels()
    path = _path_buffer()
    count = kernels.add_inplace(data, np.int64(index), np.int64(delta), path)
    return tuple(int(idx) for idx in path[:count])


def prefix_walk(
    data: np.ndarray,
    length: int,
    *,
    kernels: KernelSet | None = None,
) -> Tuple[int, Tuple[int, ...]]:
    """Sum the first ``length`` logical values and return ``(total, cells visited)``."""

    kernels = kernels or select_kernels()
    path = _path_buffer()
    total, count = kernels.prefix_walk(data, np.int64(length), path)
    return int(total), tuple(int(idx) for idx in path[:count])


def recompute(values: np.ndarray, *, kernels: KernelSet | None = None) -> np.ndarray:
    """Build a fresh aggregate store by adding each value into an all-zero store in order."""

    kernels = kernels or select_kernels()
    values_np = np.ascontiguousarray(values, dtype=np.int64)
    data = np.zeros(values_np.shape[0], dtype=np.int64)
    kernels.recompute(values_np, data)
    return data


__all__ = [
    "KernelSet",
    "PYTHON_KERNELS",
    "NUMBA_KERNELS",
    "select_kernels",
    "add_inplace",
    "prefix_walk",
    "recompute",
]
