import numpy as np
import pytest

from fenwicktrace.core.persistence import (
    construct_state,
    point_update_state,
    prefix_sum_state,
    range_sum,
    rebuild_state,
    resize_state,
)
from fenwicktrace.core.state import FenwickState
from fenwicktrace.core.trace import EMPTY_TRACE, QueryTrace, UpdateTrace


def test_construct_state_defaults():
    state = construct_state()

    assert state.size == 1
    assert state.values.tolist() == [0]
    assert state.trace is EMPTY_TRACE


def test_state_arrays_are_read_only():
    state = rebuild_state([1, 2, 3])

    assert not state.values.flags.writeable
    assert not state.aggregates.flags.writeable
    with pytest.raises(ValueError):
        state.values[0] = 5


def test_state_copies_caller_arrays():
    values = np.array([1, 2, 3, 4])
    state = rebuild_state(values)

    values[0] = 100

    assert state.values.tolist() == [1, 2, 3, 4]


def test_point_update_leaves_original_state_untouched(kernels):
    original = rebuild_state([1, 2, 3, 4], kernels=kernels)

    updated = point_update_state(original, 2, 5, kernels=kernels)

    assert original.values.tolist() == [1, 2, 3, 4]
    assert original.aggregates.tolist() == [1, 3, 3, 10]
    assert original.trace is EMPTY_TRACE
    assert updated.values.tolist() == [1, 2, 5, 4]
    assert updated.aggregates.tolist() == [1, 3, 5, 12]
    assert isinstance(updated.trace, UpdateTrace)


def test_prefix_sum_state_shares_frozen_arrays(kernels):
    original = rebuild_state([1, 2, 3, 4], kernels=kernels)

    queried = prefix_sum_state(original, 3, kernels=kernels)

    assert queried.values is original.values
    assert queried.aggregates is original.aggregates
    assert isinstance(queried.trace, QueryTrace)
    assert queried.last_sum == 6
    assert original.last_sum == 0


def test_resize_state_returns_fresh_state(kernels):
    original = prefix_sum_state(rebuild_state([7, 8, 9], kernels=kernels), 2, kernels=kernels)

    shrunk = resize_state(original, 1, kernels=kernels)

    assert shrunk.values.tolist() == [7]
    assert shrunk.trace is EMPTY_TRACE
    assert original.size == 3


def test_range_sum_function():
    state = rebuild_state([2, 4, 6, 8])

    assert range_sum(state, 1, 3) == 10
    assert range_sum(state, 0, 0) == 0


def test_mismatched_lengths_rejected():
    with pytest.raises(ValueError):
        FenwickState(values=np.zeros(3, dtype=np.int64), aggregates=np.zeros(2, dtype=np.int64))


def test_two_dimensional_input_rejected():
    with pytest.raises(ValueError):
        rebuild_state(np.zeros((2, 2), dtype=np.int64))


def test_rebuild_matches_sequence_of_point_updates(kernels):
    values = [3, -1, 4, 1, -5, 9, 2, 6, 5]

    rebuilt = rebuild_state(values, kernels=kernels)
    incremental = construct_state(len(values), kernels=kernels)
    for index, value in enumerate(values):
        incremental = point_update_state(incremental, index, value, kernels=kernels)

    assert np.array_equal(rebuilt.aggregates, incremental.aggregates)


@pytest.mark.parametrize("values", [[1.5, 2.0], ["1", "2"], [True, False]])
def test_rebuild_rejects_non_integer_values(values):
    with pytest.raises(TypeError):
        rebuild_state(values)


def test_rebuild_rejects_unsigned_values_beyond_int64():
    with pytest.raises(OverflowError):
        rebuild_state(np.array([1, 2**64 - 1], dtype=np.uint64))


def test_rebuild_accepts_unsigned_values_within_int64():
    state = rebuild_state(np.array([1, 2, 2**63 - 1], dtype=np.uint64))

    assert state.values.tolist() == [1, 2, 2**63 - 1]
