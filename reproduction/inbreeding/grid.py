"""Parameter grids and formula evaluation over them."""

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Sequence, Tuple, Union

import numpy as np
import pandas as pd

# Rounding applied to generated values so that 0.1 * 3 compares equal to 0.3.
_DECIMALS = 12

Formula = Callable[..., object]
RangeSpec = Union["SweepRange", Sequence[float]]


@dataclass(frozen=True)
class SweepRange:
    """Evenly spaced sweep from start to stop (inclusive)."""

    start: float
    stop: float
    step: float

    def values(self) -> np.ndarray:
        return param_sequence(self.start, self.stop, self.step)


def param_sequence(start: float, stop: float, step: float) -> np.ndarray:
    """Inclusive evenly spaced sequence start, start+step, ..., stop."""

    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    if stop < start:
        raise ValueError(f"stop ({stop}) must not be below start ({start})")
    if step > stop - start + 1e-9:
        raise ValueError(f"step ({step}) is larger than the range [{start}, {stop}]")
    n_steps = int(np.floor((stop - start) / step + 1e-9))
    values = start + step * np.arange(n_steps + 1)
    return np.round(values, _DECIMALS)


def _as_values(spec: RangeSpec) -> np.ndarray:
    if isinstance(spec, SweepRange):
        return spec.values()
    values = np.asarray(spec, dtype=float)
    if values.ndim != 1 or values.size == 0:
        raise ValueError("parameter values must be a non-empty 1-D sequence")
    return values


def parameter_grid(ranges: Mapping[str, RangeSpec]) -> pd.DataFrame:
    """Cartesian product of the named parameter sequences.

    The first parameter varies slowest. A SweepRange is expanded with
    param_sequence; any other sequence is taken as literal values.
    """
    if not ranges:
        raise ValueError("at least one parameter is required")
    names = list(ranges)
    columns = [_as_values(ranges[name]) for name in names]
    return pd.MultiIndex.from_product(columns, names=names).to_frame(index=False)


def evaluate(
    grid: pd.DataFrame,
    name: str,
    formula: Formula,
    columns: Sequence[str],
) -> pd.DataFrame:
    """Return a copy of the grid with formula(*columns) appended as name."""

    args = [grid[column] for column in columns]
    return grid.assign(**{name: formula(*args)})


def evaluate_all(
    grid: pd.DataFrame,
    derived: Mapping[str, Tuple[Formula, Sequence[str]]],
) -> pd.DataFrame:
    """Append several derived columns, in mapping order."""

    table = grid
    for name, (formula, columns) in derived.items():
        table = evaluate(table, name, formula, columns)
    return table


def grid_shape(ranges: Mapping[str, RangeSpec]) -> Dict[str, int]:
    """Number of values per parameter (the grid has their product rows)."""

    return {name: int(_as_values(spec).size) for name, spec in ranges.items()}
