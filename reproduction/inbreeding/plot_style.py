"""Matplotlib styling for the threshold figures."""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class PlotStyle:
    """Explicit plotting configuration passed to every rendering call.

    Settings are applied with matplotlib.rc_context, so rendering never
    changes the global rcParams.
    """

    dpi: int = 150
    save_dpi: int = 300
    font_size: float = 10
    title_size: float = 11
    label_size: float = 10
    tick_size: float = 9
    legend_size: float = 9
    cmap: str = "viridis"
    line_width: float = 1.2
    control_line_width: float = 1.0
    control_color: str = "black"
    axis_limits: Tuple[float, float] = (0.0, 1.0)
    axis_pad: float = 0.03
    panel_size: Tuple[float, float] = (3.0, 2.8)

    def rc_params(self) -> Dict[str, object]:
        return {
            "figure.dpi": self.dpi,
            "font.size": self.font_size,
            "axes.titlesize": self.title_size,
            "axes.labelsize": self.label_size,
            "legend.fontsize": self.legend_size,
            "xtick.labelsize": self.tick_size,
            "ytick.labelsize": self.tick_size,
        }

    def padded_limits(self) -> Tuple[float, float]:
        lo, hi = self.axis_limits
        return lo - self.axis_pad, hi + self.axis_pad


def default_style() -> PlotStyle:
    """Lightweight style for consistent plots."""

    return PlotStyle()
