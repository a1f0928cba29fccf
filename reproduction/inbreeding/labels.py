"""Display labels for facet categories."""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd


class LabelError(ValueError):
    """Raised when a value has no label in the known category set."""


@dataclass(frozen=True)
class CategoryLabels:
    """Total mapping from a finite set of numeric values to display labels.

    Labels default to "<symbol> = <value>"; explicit text overrides that.
    Facets are ordered by the order of `values`.
    """

    symbol: str
    values: Sequence[float]
    text: Mapping[float, str] = field(default_factory=dict, hash=False)
    tol: float = 1e-9

    def _index(self, value: float) -> int:
        for idx, known in enumerate(self.values):
            if abs(float(value) - known) <= self.tol:
                return idx
        raise LabelError(
            f"{self.symbol}: no label for value {value!r}; known values are {list(self.values)}"
        )

    def label(self, value: float) -> str:
        known = self.values[self._index(value)]
        if known in self.text:
            return self.text[known]
        return f"{self.symbol} = {known:g}"

    @property
    def categories(self) -> List[str]:
        return [self.label(value) for value in self.values]

    def apply(self, column: pd.Series) -> pd.Series:
        """Map a column to an ordered categorical of labels."""

        cache: Dict[float, str] = {}
        labels = []
        for value in column.to_numpy(dtype=float):
            if value not in cache:
                cache[value] = self.label(value)
            labels.append(cache[value])
        return pd.Series(
            pd.Categorical(labels, categories=self.categories, ordered=True),
            index=column.index,
            name=column.name,
        )


def alpha_labels(values: Optional[Sequence[float]] = None) -> CategoryLabels:
    """Facet labels for care effectiveness α."""

    if values is None:
        values = (0.0, 0.25, 0.5, 0.75, 1.0)
    return CategoryLabels("α", tuple(float(v) for v in values))


def sex_labels() -> CategoryLabels:
    return CategoryLabels("sex", (0.0, 1.0), text={0.0: "Female", 1.0: "Male"})


def label_column(frame: pd.DataFrame, column: str, labels: CategoryLabels, name: str) -> pd.DataFrame:
    """Return a copy of frame with a labelled categorical column added."""

    return frame.assign(**{name: labels.apply(frame[column])})
