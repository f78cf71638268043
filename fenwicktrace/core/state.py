from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict

import numpy as np

from fenwicktrace.core.trace import EMPTY_TRACE, TraversalTrace, trace_total


def _frozen_int_array(values: Any) -> np.ndarray:
    if (
        isinstance(values, np.ndarray)
        and values.dtype == np.int64
        and values.ndim == 1
        and not values.flags.writeable
        and values.base is None
    ):
        # Already frozen; states may share it.
        return values
    array = np.array(values, dtype=np.int64, copy=True)
    if array.ndim != 1:
        raise ValueError(f"Fenwick arrays must be 1-D, got shape {array.shape}.")
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class FenwickState:
    """Immutable bundle of logical values, aggregate store and current trace.

    ``values[i]`` is the user-visible element ``i``. ``aggregates[i]`` holds the
    sum of ``values`` over ``(i - lowbit(i + 1), i]``. Both arrays are read-only
    and always share a length; operations build a new state instead of editing
    this one.

    Values are int64. Inputs outside that range raise ``OverflowError``, but
    aggregate sums are not checked: a cell whose sum leaves the int64 range
    wraps around (two's complement), and so does any prefix sum read from it.
    """

    values: np.ndarray
    aggregates: np.ndarray
    trace: TraversalTrace = field(default=EMPTY_TRACE)

    def __post_init__(self) -> None:
        values = _frozen_int_array(self.values)
        aggregates = _frozen_int_array(self.aggregates)
        if values.shape != aggregates.shape:
            raise ValueError(
                "values and aggregates must share a length "
                f"(got {values.shape[0]} and {aggregates.shape[0]})."
            )
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "aggregates", aggregates)

    @property
    def size(self) -> int:
        return int(self.values.shape[0])

    @property
    def last_sum(self) -> int:
        return trace_total(self.trace)

    def replace(self, **kwargs: Any) -> "FenwickState":
        return replace(self, **kwargs)

    def materialise(self) -> Dict[str, Any]:
        """Plain-Python snapshot for display layers and logs."""

        return {
            "values": [int(v) for v in self.values],
            "aggregates": [int(v) for v in self.aggregates],
            "trace": {
                "kind": self.trace.kind,
                "indices": list(self.trace.indices),
            },
            "sum": self.last_sum,
        }


__all__ = ["FenwickState"]
