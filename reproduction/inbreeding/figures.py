"""Figure generation for the inbreeding threshold figures."""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

import pandas as pd
import matplotlib.pyplot as plt

from .charts import Panel, compose_side_by_side, format_axes, line_chart
from .grid import SweepRange, evaluate_all, parameter_grid
from .labels import alpha_labels, label_column, sex_labels
from .model import (
    alpha_threshold,
    care_threshold_female,
    care_threshold_male,
    control_threshold_female,
    control_threshold_male,
    depression_threshold_female,
    depression_threshold_male,
    reproductive_output,
    validate_params,
)
from .plot_style import PlotStyle, default_style


@dataclass(frozen=True)
class FigureGrid:
    """Named parameter sweeps for one figure, slowest-varying first."""

    name: str
    ranges: Tuple[Tuple[str, SweepRange], ...]

    def as_mapping(self) -> Dict[str, SweepRange]:
        return dict(self.ranges)

    def build(self) -> pd.DataFrame:
        """Materialise the grid; every parameter must lie in [0, 1]."""

        grid = parameter_grid(self.as_mapping())
        validate_params(grid)
        return grid


def _unit(step: float) -> SweepRange:
    return SweepRange(0.0, 1.0, step)


def figure_grids() -> Dict[str, FigureGrid]:
    """Default sweeps for the four figures."""

    return {
        "reproductive_output": FigureGrid(
            "reproductive_output",
            (("a", _unit(0.25)), ("c", _unit(0.1)), ("D", _unit(0.05))),
        ),
        "inbreeding_thresholds": FigureGrid(
            "inbreeding_thresholds",
            (("r", _unit(0.1)), ("a", _unit(0.001))),
        ),
        "male_care_thresholds": FigureGrid(
            "male_care_thresholds",
            (("a", _unit(0.25)), ("r", _unit(0.1)), ("N_m", _unit(0.05))),
        ),
        "alpha_threshold": FigureGrid(
            "alpha_threshold",
            (("N_m", _unit(0.001)),),
        ),
    }


def _grid(name: str, grids: Optional[Mapping[str, FigureGrid]]) -> pd.DataFrame:
    grids = grids or figure_grids()
    return grids[name].build()


def _save(fig: plt.Figure, path: str, style: PlotStyle) -> None:
    fig.savefig(path, dpi=style.save_dpi, bbox_inches="tight")
    plt.close(fig)


# ------------------------------------------------------------------------------
# Evaluated tables
# ------------------------------------------------------------------------------


def reproductive_output_table(grids: Optional[Mapping[str, FigureGrid]] = None) -> pd.DataFrame:
    table = evaluate_all(
        _grid("reproductive_output", grids),
        {"fitness": (reproductive_output, ("D", "a", "c"))},
    )
    return label_column(table, "a", alpha_labels(), "alpha_label")


def inbreeding_threshold_table(grids: Optional[Mapping[str, FigureGrid]] = None) -> pd.DataFrame:
    return evaluate_all(
        _grid("inbreeding_thresholds", grids),
        {
            "depression_threshold_f": (depression_threshold_female, ("r", "a")),
            "depression_threshold_m": (depression_threshold_male, ("r", "a")),
        },
    )


def male_care_table(grids: Optional[Mapping[str, FigureGrid]] = None) -> pd.DataFrame:
    """Wide table: female and male thresholds plus their control conditions."""

    return evaluate_all(
        _grid("male_care_thresholds", grids),
        {
            "depression_threshold_f": (care_threshold_female, ("r", "a", "N_m")),
            "depression_threshold_m": (care_threshold_male, ("r", "a", "N_m")),
            "control_threshold_f": (control_threshold_female, ("r",)),
            "control_threshold_m": (control_threshold_male, ("r",)),
        },
    )


def male_care_long_table(wide: pd.DataFrame) -> pd.DataFrame:
    """Stack the female and male columns into one threshold column by sex."""

    keys = ["a", "r", "N_m"]
    female = wide[keys].assign(
        sex=0.0,
        threshold=wide["depression_threshold_f"],
        control=wide["control_threshold_f"],
    )
    male = wide[keys].assign(
        sex=1.0,
        threshold=wide["depression_threshold_m"],
        control=wide["control_threshold_m"],
    )
    long = pd.concat([female, male], ignore_index=True)
    long = label_column(long, "sex", sex_labels(), "sex_label")
    return label_column(long, "a", alpha_labels(), "alpha_label")


def alpha_threshold_table(grids: Optional[Mapping[str, FigureGrid]] = None) -> pd.DataFrame:
    return evaluate_all(
        _grid("alpha_threshold", grids),
        {"alpha_threshold": (alpha_threshold, ("N_m",))},
    )


# ------------------------------------------------------------------------------
# Figures
# ------------------------------------------------------------------------------


def figure_reproductive_output(
    path: str,
    style: Optional[PlotStyle] = None,
    grids: Optional[Mapping[str, FigureGrid]] = None,
) -> pd.DataFrame:
    """Inbred offspring fitness against δ, faceted by care effectiveness."""

    style = style or default_style()
    table = reproductive_output_table(grids)
    with plt.rc_context(style.rc_params()):
        fig = line_chart(
            table,
            "D",
            "fitness",
            "c",
            facet_col="alpha_label",
            style=style,
            xlabel=r"Inbreeding depression $\delta$",
            ylabel="Reproductive output",
            color_label="Parental care $c$",
        )
        _save(fig, path, style)
    return table


def figure_inbreeding_thresholds(
    path: str,
    style: Optional[PlotStyle] = None,
    grids: Optional[Mapping[str, FigureGrid]] = None,
) -> pd.DataFrame:
    """Female and male tolerance thresholds without male care."""

    style = style or default_style()
    table = inbreeding_threshold_table(grids)
    with plt.rc_context(style.rc_params()):
        fig = compose_side_by_side(
            Panel(table, "depression_threshold_f", "(A) Female"),
            Panel(table, "depression_threshold_m", "(B) Male"),
            "a",
            "r",
            style=style,
            xlabel=r"Care effectiveness $\alpha$",
            ylabel=r"Inbreeding depression threshold $\delta$",
            color_label="Relatedness $r$",
        )
        _save(fig, path, style)
    return table


def figure_male_care_thresholds(
    path: str,
    style: Optional[PlotStyle] = None,
    grids: Optional[Mapping[str, FigureGrid]] = None,
) -> pd.DataFrame:
    """Thresholds with male care against ΔN_m; dashed lines are the control."""

    style = style or default_style()
    table = male_care_long_table(male_care_table(grids))
    with plt.rc_context(style.rc_params()):
        fig = line_chart(
            table,
            "N_m",
            "threshold",
            "r",
            facet_row="sex_label",
            facet_col="alpha_label",
            reference="control",
            style=style,
            xlabel=r"Male cost of care $\Delta N_m$",
            ylabel=r"Threshold $\delta$",
            color_label="Relatedness $r$",
        )
        _save(fig, path, style)
    return table


def figure_alpha_threshold(
    path: str,
    style: Optional[PlotStyle] = None,
    grids: Optional[Mapping[str, FigureGrid]] = None,
) -> pd.DataFrame:
    """Care effectiveness needed for male care to raise the tolerated δ."""

    style = style or default_style()
    table = alpha_threshold_table(grids)
    cost = table["N_m"]
    threshold = table["alpha_threshold"]
    with plt.rc_context(style.rc_params()):
        fig, ax = plt.subplots(figsize=(style.panel_size[0] * 1.6, style.panel_size[1] * 1.6))
        ax.fill_between(cost, threshold, 1.0, color="#b7e3b3", alpha=0.6, label="Care raises threshold")
        ax.fill_between(cost, 0.0, threshold, color="#f4b6b6", alpha=0.6, label="Care lowers threshold")
        ax.plot(cost, threshold, color="black", linewidth=style.line_width * 1.5,
                label=r"$\alpha^* = 2\Delta N_m / (1 + \Delta N_m)$")
        ax.plot(cost, cost, color="gray", linewidth=style.control_line_width, linestyle="--",
                label=r"$\alpha = \Delta N_m$")
        format_axes(ax, style)
        ax.set_xlabel(r"Male cost of care $\Delta N_m$")
        ax.set_ylabel(r"Care effectiveness $\alpha$")
        ax.legend(loc="lower right", framealpha=0.9)
        _save(fig, path, style)
    return table
