"""Tests for inbreeding.grid — sweeps, Cartesian products, derived columns."""

import numpy as np
import pandas as pd
import pytest

from inbreeding.grid import (
    SweepRange,
    evaluate,
    evaluate_all,
    grid_shape,
    param_sequence,
    parameter_grid,
)
from inbreeding.model import depression_threshold_female, reproductive_output


@pytest.mark.parametrize(
    "step, length",
    [(0.05, 21), (0.25, 5), (0.1, 11), (0.001, 1001)],
)
def test_param_sequence_is_inclusive(step, length):
    values = param_sequence(0.0, 1.0, step)
    assert len(values) == length
    assert values[0] == 0.0
    assert values[-1] == 1.0


def test_param_sequence_values_compare_exactly():
    values = param_sequence(0.0, 1.0, 0.1)
    assert 0.3 in values
    assert 0.7 in values
    assert list(param_sequence(0.0, 1.0, 0.25)) == [0.0, 0.25, 0.5, 0.75, 1.0]


@pytest.mark.parametrize("start, stop, step", [(0.0, 1.0, 0.0), (0.0, 1.0, -0.1), (1.0, 0.0, 0.1), (0.0, 0.5, 1.0)])
def test_param_sequence_rejects_malformed_ranges(start, stop, step):
    with pytest.raises(ValueError):
        param_sequence(start, stop, step)


def test_parameter_grid_is_cartesian_product():
    grid = parameter_grid({"r": SweepRange(0.0, 1.0, 0.5), "a": [0.0, 1.0]})
    assert list(grid.columns) == ["r", "a"]
    assert len(grid) == 6
    assert grid.values.tolist() == [
        [0.0, 0.0],
        [0.0, 1.0],
        [0.5, 0.0],
        [0.5, 1.0],
        [1.0, 0.0],
        [1.0, 1.0],
    ]


def test_parameter_grid_row_count_is_product_of_lengths():
    ranges = {"a": SweepRange(0.0, 1.0, 0.25), "c": SweepRange(0.0, 1.0, 0.1), "D": SweepRange(0.0, 1.0, 0.05)}
    grid = parameter_grid(ranges)
    assert grid_shape(ranges) == {"a": 5, "c": 11, "D": 21}
    assert len(grid) == 5 * 11 * 21
    assert not grid.duplicated().any()


def test_parameter_grid_rejects_empty_input():
    with pytest.raises(ValueError):
        parameter_grid({})
    with pytest.raises(ValueError):
        parameter_grid({"r": []})


def test_evaluate_returns_new_frame():
    grid = parameter_grid({"D": [0.4], "a": [0.5], "c": [1.0]})
    table = evaluate(grid, "fitness", reproductive_output, ("D", "a", "c"))
    assert "fitness" not in grid.columns
    assert table["fitness"].iloc[0] == pytest.approx(0.8)


def test_evaluate_all_appends_in_order():
    grid = parameter_grid({"r": [0.5], "a": [0.0]})
    table = evaluate_all(
        grid,
        {
            "depression_threshold_f": (depression_threshold_female, ("r", "a")),
            "double": (lambda x: 2 * x, ("depression_threshold_f",)),
        },
    )
    assert list(table.columns) == ["r", "a", "depression_threshold_f", "double"]
    assert table["double"].iloc[0] == pytest.approx(2.0 / 3.0)


def test_evaluate_missing_column_raises():
    grid = pd.DataFrame({"r": [0.5]})
    with pytest.raises(KeyError):
        evaluate(grid, "x", depression_threshold_female, ("r", "a"))


def test_evaluate_keeps_row_order():
    grid = parameter_grid({"r": SweepRange(0.0, 1.0, 0.1), "a": SweepRange(0.0, 1.0, 0.5)})
    table = evaluate(grid, "t", depression_threshold_female, ("r", "a"))
    np.testing.assert_array_equal(table[["r", "a"]].to_numpy(), grid.to_numpy())


def test_parameter_grid_reads_tuples_as_literal_values():
    grid = parameter_grid({"a": (0.0, 0.5, 1.0), "r": (0.2, 0.4, 0.6)})
    assert len(grid) == 9
    assert sorted(grid["a"].unique()) == [0.0, 0.5, 1.0]


def test_param_sequence_single_step_range():
    assert list(param_sequence(0.1, 0.3, 0.2)) == [0.1, 0.3]
