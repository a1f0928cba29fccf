"""Line-chart rendering for evaluated parameter grids."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib import cm
from matplotlib.colors import Normalize

from .plot_style import PlotStyle, default_style


@dataclass(frozen=True)
class Panel:
    """One chart of a side-by-side composition."""

    frame: pd.DataFrame
    y: str
    title: str
    reference: Optional[str] = None


def _require(frame: pd.DataFrame, columns: Sequence[Optional[str]]) -> None:
    missing = [c for c in columns if c is not None and c not in frame.columns]
    if missing:
        raise KeyError(f"missing columns: {missing}; available: {list(frame.columns)}")


def _categories(frame: pd.DataFrame, column: Optional[str]) -> List[object]:
    if column is None:
        return [None]
    series = frame[column]
    if isinstance(series.dtype, pd.CategoricalDtype):
        present = set(series.unique())
        return [c for c in series.cat.categories if c in present]
    return sorted(series.unique())


def color_norm(*frames: pd.DataFrame, color: str) -> Normalize:
    """Shared colour scale across all frames."""

    values = np.concatenate([f[color].to_numpy(dtype=float) for f in frames])
    return Normalize(vmin=float(np.min(values)), vmax=float(np.max(values)))


def format_axes(ax: plt.Axes, style: PlotStyle) -> None:
    lo, hi = style.padded_limits()
    ax.set_xlim(lo, hi)
    ax.set_ylim(lo, hi)
    ax.grid(True, alpha=0.3, linestyle="--")


def draw_curves(
    ax: plt.Axes,
    frame: pd.DataFrame,
    x: str,
    y: str,
    color: str,
    norm: Normalize,
    style: PlotStyle,
    reference: Optional[str] = None,
) -> None:
    """One line per value of the colour column.

    Points where y is NaN are dropped from the curve.
    """
    cmap = plt.get_cmap(style.cmap)
    for value, group in frame.groupby(color, sort=True):
        group = group.sort_values(x)
        rgba = cmap(norm(float(value)))
        valid = group[y].notna()
        ax.plot(
            group.loc[valid, x],
            group.loc[valid, y],
            color=rgba,
            linewidth=style.line_width,
        )
        if reference is not None:
            ax.plot(
                group[x],
                group[reference],
                color=rgba,
                linewidth=style.control_line_width,
                linestyle="--",
            )
    format_axes(ax, style)


def _add_colorbar(fig: plt.Figure, axes: np.ndarray, norm: Normalize, style: PlotStyle, label: str) -> None:
    mappable = cm.ScalarMappable(norm=norm, cmap=plt.get_cmap(style.cmap))
    mappable.set_array([])
    fig.colorbar(mappable, ax=list(np.ravel(axes)), label=label, pad=0.04, fraction=0.035)


def line_chart(
    frame: pd.DataFrame,
    x: str,
    y: str,
    color: str,
    *,
    facet_row: Optional[str] = None,
    facet_col: Optional[str] = None,
    reference: Optional[str] = None,
    style: Optional[PlotStyle] = None,
    xlabel: Optional[str] = None,
    ylabel: Optional[str] = None,
    color_label: Optional[str] = None,
    title: Optional[str] = None,
) -> plt.Figure:
    """Faceted line chart with a continuous colour scale.

    Facet columns holding labelled categoricals are laid out in category
    order; the row facet label is written to the right of the last column.
    """
    style = style or default_style()
    _require(frame, [x, y, color, facet_row, facet_col, reference])

    rows = _categories(frame, facet_row)
    cols = _categories(frame, facet_col)
    width, height = style.panel_size
    fig, axes = plt.subplots(
        len(rows),
        len(cols),
        figsize=(width * len(cols) + 1.2, height * len(rows)),
        sharex=True,
        sharey=True,
        squeeze=False,
    )
    norm = color_norm(frame, color=color)

    for i, row_value in enumerate(rows):
        for j, col_value in enumerate(cols):
            subset = frame
            if facet_row is not None:
                subset = subset[subset[facet_row] == row_value]
            if facet_col is not None:
                subset = subset[subset[facet_col] == col_value]
            ax = axes[i, j]
            draw_curves(ax, subset, x, y, color, norm, style, reference=reference)
            if i == 0 and facet_col is not None:
                ax.set_title(str(col_value))
            if j == len(cols) - 1 and facet_row is not None:
                ax.text(
                    1.04,
                    0.5,
                    str(row_value),
                    transform=ax.transAxes,
                    rotation=-90,
                    va="center",
                    ha="left",
                )
            if i == len(rows) - 1:
                ax.set_xlabel(xlabel or x)
            if j == 0:
                ax.set_ylabel(ylabel or y)

    _add_colorbar(fig, axes, norm, style, color_label or color)
    if title:
        fig.suptitle(title, fontsize=style.title_size + 1)
    return fig


def compose_side_by_side(
    left: Panel,
    right: Panel,
    x: str,
    color: str,
    *,
    style: Optional[PlotStyle] = None,
    xlabel: Optional[str] = None,
    ylabel: Optional[str] = None,
    color_label: Optional[str] = None,
    title: Optional[str] = None,
) -> plt.Figure:
    """Two charts in one figure with one colour bar and shared axis titles."""

    style = style or default_style()
    for panel in (left, right):
        _require(panel.frame, [x, panel.y, color, panel.reference])

    width, height = style.panel_size
    fig, axes = plt.subplots(1, 2, figsize=(2 * width * 1.3 + 1.2, height * 1.3), sharey=True, squeeze=False)
    norm = color_norm(left.frame, right.frame, color=color)

    for ax, panel in zip(axes[0], (left, right)):
        draw_curves(ax, panel.frame, x, panel.y, color, norm, style, reference=panel.reference)
        ax.set_title(panel.title)
        ax.set_xlabel(xlabel or x)
    axes[0, 0].set_ylabel(ylabel or left.y)

    _add_colorbar(fig, axes, norm, style, color_label or color)
    if title:
        fig.suptitle(title, fontsize=style.title_size + 1)
    return fig
