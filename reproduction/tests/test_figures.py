"""Tests for figure tables and rendering."""

import numpy as np
import pandas as pd
import pytest
import matplotlib.pyplot as plt

from inbreeding.charts import Panel, compose_side_by_side, line_chart
from inbreeding.figures import (
    FigureGrid,
    alpha_threshold_table,
    figure_alpha_threshold,
    figure_grids,
    figure_inbreeding_thresholds,
    figure_male_care_thresholds,
    figure_reproductive_output,
    inbreeding_threshold_table,
    male_care_long_table,
    male_care_table,
    reproductive_output_table,
)
from inbreeding.grid import SweepRange
from inbreeding.plot_style import PlotStyle, default_style


def _small_grids():
    grids = figure_grids()
    grids["inbreeding_thresholds"] = FigureGrid(
        "inbreeding_thresholds",
        (("r", SweepRange(0.0, 1.0, 0.5)), ("a", SweepRange(0.0, 1.0, 0.1))),
    )
    grids["alpha_threshold"] = FigureGrid("alpha_threshold", (("N_m", SweepRange(0.0, 1.0, 0.1)),))
    return grids


def test_reproductive_output_table():
    table = reproductive_output_table()
    assert len(table) == 5 * 11 * 21
    row = table[(table["D"] == 0.4) & (table["a"] == 0.5) & (table["c"] == 1.0)]
    assert row["fitness"].iloc[0] == pytest.approx(0.8)
    assert table["alpha_label"].nunique() == 5


def test_inbreeding_threshold_table_size_and_values():
    table = inbreeding_threshold_table()
    assert len(table) == 11 * 1001
    row = table[(table["r"] == 0.5) & (table["a"] == 0.0)]
    assert row["depression_threshold_f"].iloc[0] == pytest.approx(1.0 / 3.0)
    assert row["depression_threshold_m"].iloc[0] == pytest.approx(2.0 / 3.0)


def test_male_care_table_alpha_one_is_flat():
    table = male_care_table()
    at_one = table[(table["a"] == 1.0) & (table["N_m"] < 1.0)]
    for r, group in at_one.groupby("r"):
        np.testing.assert_allclose(group["depression_threshold_f"], 2 * r / (1 + r))
        np.testing.assert_allclose(group["depression_threshold_m"], 2 / (1 + r))


def test_male_care_table_nan_only_at_degenerate_point():
    table = male_care_table()
    undefined = table["depression_threshold_f"].isna()
    assert undefined.sum() == 11
    assert (table.loc[undefined, "a"] == 1.0).all()
    assert (table.loc[undefined, "N_m"] == 1.0).all()


def test_male_care_long_table():
    wide = male_care_table()
    long = male_care_long_table(wide)
    assert len(long) == 2 * len(wide)
    assert list(long["sex_label"].cat.categories) == ["Female", "Male"]
    female = long[long["sex_label"] == "Female"]
    np.testing.assert_allclose(female["control"], female["r"] / (1 + female["r"]))


def test_alpha_threshold_table():
    table = alpha_threshold_table()
    assert len(table) == 1001
    assert table["alpha_threshold"].is_monotonic_increasing
    row = table[table["N_m"] == 0.5]
    assert row["alpha_threshold"].iloc[0] == pytest.approx(2.0 / 3.0)


def test_line_chart_facets():
    table = reproductive_output_table()
    fig = line_chart(table, "D", "fitness", "c", facet_col="alpha_label")
    axes = fig.axes[:-1]  # last axes is the colorbar
    assert len(axes) == 5
    assert [ax.get_title() for ax in axes] == ["α = 0", "α = 0.25", "α = 0.5", "α = 0.75", "α = 1"]
    assert len(axes[0].get_lines()) == 11
    style = default_style()
    assert axes[0].get_xlim() == pytest.approx(style.padded_limits())
    assert axes[0].get_ylim() == pytest.approx(style.padded_limits())
    plt.close(fig)


def test_line_chart_reference_curves_are_dashed():
    table = male_care_long_table(male_care_table())
    fig = line_chart(
        table, "N_m", "threshold", "r", facet_row="sex_label", facet_col="alpha_label", reference="control"
    )
    axes = fig.axes[:-1]
    assert len(axes) == 10
    lines = axes[0].get_lines()
    assert len(lines) == 22
    assert sum(line.get_linestyle() == "--" for line in lines) == 11
    plt.close(fig)


def test_line_chart_missing_column_raises():
    with pytest.raises(KeyError):
        line_chart(pd.DataFrame({"x": [0.0], "y": [0.0]}), "x", "y", "r")


def test_compose_side_by_side_shares_colorbar():
    table = inbreeding_threshold_table(_small_grids())
    fig = compose_side_by_side(
        Panel(table, "depression_threshold_f", "Female"),
        Panel(table, "depression_threshold_m", "Male"),
        "a",
        "r",
        ylabel="threshold",
    )
    assert len(fig.axes) == 3
    left, right = fig.axes[:2]
    assert left.get_ylabel() == "threshold"
    assert right.get_ylabel() == ""
    assert len(left.get_lines()) == 3
    plt.close(fig)


def test_rendering_does_not_touch_global_rcparams(tmp_path):
    before = plt.rcParams["font.size"]
    style = PlotStyle(font_size=before + 7)
    figure_alpha_threshold(str(tmp_path / "alpha.png"), style=style, grids=_small_grids())
    assert plt.rcParams["font.size"] == before


@pytest.mark.parametrize(
    "render, name",
    [
        (figure_reproductive_output, "reproductive_output"),
        (figure_inbreeding_thresholds, "inbreeding_thresholds"),
        (figure_male_care_thresholds, "male_care_thresholds"),
        (figure_alpha_threshold, "alpha_threshold"),
    ],
)
def test_figures_write_files(tmp_path, render, name):
    path = tmp_path / f"{name}.png"
    style = PlotStyle(dpi=50, save_dpi=50)
    table = render(str(path), style=style, grids=_small_grids())
    assert path.exists()
    assert path.stat().st_size > 0
    assert len(table) > 0
    assert plt.get_fignums() == []


def test_figure_grid_rejects_sweep_outside_unit_interval():
    grids = figure_grids()
    grids["alpha_threshold"] = FigureGrid("alpha_threshold", (("N_m", SweepRange(0.0, 1.5, 0.5)),))
    with pytest.raises(ValueError, match="N_m"):
        alpha_threshold_table(grids)


def test_default_figure_grids_build():
    for grid in figure_grids().values():
        table = grid.build()
        assert table.min().min() == 0.0
        assert table.max().max() == 1.0
