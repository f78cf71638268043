from __future__ import annotations

import numpy as np
from hypothesis import HealthCheck, given, settings, strategies as st

from fenwicktrace import EmptyTrace, FenwickTree, QueryTrace, UpdateTrace
from fenwicktrace.algo.bits import query_path, update_path
from fenwicktrace.algo.kernels import select_kernels

_values = st.integers(min_value=-10**9, max_value=10**9)
_arrays = st.lists(_values, min_size=1, max_size=64)
_kernel_names = st.sampled_from(["python", "numba"])

# First numba call compiles, so no per-example deadline.
_SETTINGS = settings(
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)


@_SETTINGS
@given(values=_arrays, kernel=_kernel_names)
def test_prefix_sums_match_naive_sums(values: list[int], kernel: str) -> None:
    tree = FenwickTree.from_values(values, kernels=select_kernels(kernel))
    for length in range(len(values) + 1):
        total, trace = tree.prefix_sum(length)
        assert total == sum(values[:length])
        assert trace.indices == query_path(length)


@_SETTINGS
@given(data=st.data(), values=_arrays, kernel=_kernel_names)
def test_point_update_consistency(data, values: list[int], kernel: str) -> None:
    tree = FenwickTree.from_values(values, kernels=select_kernels(kernel))
    index = data.draw(st.integers(min_value=0, max_value=len(values) - 1))
    new_value = data.draw(_values)

    trace = tree.point_update(index, new_value)

    assert trace.indices == update_path(index, len(values))
    total, _ = tree.prefix_sum(len(values))
    assert total == sum(values) - values[index] + new_value


@_SETTINGS
@given(values=_arrays)
def test_rebuild_is_idempotent(values: list[int]) -> None:
    tree = FenwickTree.from_values(values)
    first = tree.aggregates.copy()
    tree.rebuild(values)
    assert np.array_equal(first, tree.aggregates)


@_SETTINGS
@given(values=_arrays)
def test_aggregate_cells_hold_their_ranges(values: list[int]) -> None:
    tree = FenwickTree.from_values(values)
    for index in range(len(values)):
        start = (index + 1) - ((index + 1) & -(index + 1))
        assert int(tree.aggregates[index]) == sum(values[start : index + 1])


_operations = st.lists(
    st.one_of(
        st.tuples(st.just("set"), st.integers(0, 40), _values),
        st.tuples(st.just("sum"), st.integers(0, 40)),
        st.tuples(st.just("resize"), st.integers(1, 40)),
        st.tuples(st.just("rebuild")),
    ),
    max_size=20,
)


@_SETTINGS
@given(operations=_operations)
def test_exactly_one_trace_is_current(operations) -> None:
    tree = FenwickTree()
    mirror = [0]
    for operation in operations:
        op = operation[0]
        if op == "set":
            index = operation[1] % len(mirror)
            tree.point_update(index, operation[2])
            mirror[index] = operation[2]
            assert isinstance(tree.trace, UpdateTrace)
        elif op == "sum":
            length = operation[1] % (len(mirror) + 1)
            total, _ = tree.prefix_sum(length)
            assert total == sum(mirror[:length])
            assert isinstance(tree.trace, QueryTrace)
        elif op == "resize":
            size = operation[1]
            mirror = (mirror + [0] * size)[:size]
            tree.resize(size)
            assert isinstance(tree.trace, EmptyTrace)
        else:
            tree.rebuild(tree.values)
            assert isinstance(tree.trace, EmptyTrace)
        assert len(tree.values) == len(tree.aggregates) == len(mirror)
        assert tree.values.tolist() == mirror
        assert tree.last_sum == (tree.trace.total if isinstance(tree.trace, QueryTrace) else 0)


@_SETTINGS
@given(size=st.integers(2, 40), data=st.data())
def test_shrink_then_grow_yields_zeros(size: int, data) -> None:
    keep = data.draw(st.integers(1, size - 1))
    values = data.draw(st.lists(st.integers(1, 100), min_size=size, max_size=size))
    tree = FenwickTree.from_values(values)

    tree.resize(keep)
    tree.resize(size)

    assert tree.values.tolist() == values[:keep] + [0] * (size - keep)
