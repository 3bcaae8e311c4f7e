"""
Labeled time series and the pipe operators that process them.

XTSeries is the value flowing through workflow chains: a label and an
immutable vector of observations. The operators below map a list of
XTSeries to a new list of XTSeries, so they can be chained with
nbworkflow.workflow.transform.Transform and terminated with a DataSink.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

import numpy as np
import pandas as pd

from nbworkflow.core.errors import InvalidArgument
from nbworkflow.workflow.pipe_operator import PipeOperator


@dataclass(frozen=True, eq=False)
class XTSeries:
    """Immutable labeled time series."""

    label: str
    values: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if self.values is None:
            raise InvalidArgument(f"XTSeries '{self.label}': values are undefined")
        values = np.array(self.values, dtype=float).ravel()
        values.setflags(write=False)
        object.__setattr__(self, "label", str(self.label))
        object.__setattr__(self, "values", values)

    @classmethod
    def from_series(cls, series: pd.Series, label: Optional[str] = None) -> "XTSeries":
        return cls(label=label if label is not None else str(series.name), values=series.to_numpy())

    def to_series(self) -> pd.Series:
        return pd.Series(self.values, name=self.label)

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def __getitem__(self, i: Any) -> Any:
        return self.values[i]

    def __repr__(self) -> str:
        return f"XTSeries(label={self.label!r}, size={len(self)})"


def _map_series(
    xs: Sequence[XTSeries],
    fn: Callable[[XTSeries], np.ndarray],
    caller: str,
) -> List[XTSeries]:
    if xs is None or len(xs) == 0:
        raise InvalidArgument(f"{caller}: no time series to process")
    return [XTSeries(x.label, fn(x)) for x in xs]


class MovingAverage(PipeOperator):
    """
    Simple moving average over ``period`` observations.

    The first ``period - 1`` values average the observations available so
    far, so the output has the same length as the input.
    """

    def __init__(self, period: int):
        if period is None or int(period) < 1:
            raise InvalidArgument(f"MovingAverage: period must be >= 1, got {period}")
        self.period = int(period)

    def _smooth(self, x: XTSeries) -> np.ndarray:
        return x.to_series().rolling(window=self.period, min_periods=1).mean().to_numpy()

    def apply(self, data: Sequence[XTSeries]) -> List[XTSeries]:
        return _map_series(data, self._smooth, "MovingAverage")


class ZScoreNormalizer(PipeOperator):
    """Standardizes each series to zero mean and unit (population) variance."""

    @staticmethod
    def _normalize(x: XTSeries) -> np.ndarray:
        std = x.values.std()
        if len(x) == 0 or std == 0.0:
            raise InvalidArgument(f"ZScoreNormalizer: series '{x.label}' is empty or constant")
        return (x.values - x.values.mean()) / std

    def apply(self, data: Sequence[XTSeries]) -> List[XTSeries]:
        return _map_series(data, self._normalize, "ZScoreNormalizer")


class MinMaxNormalizer(PipeOperator):
    """Rescales each series to [low, high]."""

    def __init__(self, low: float = 0.0, high: float = 1.0):
        if not low < high:
            raise InvalidArgument(f"MinMaxNormalizer: empty target range [{low}, {high}]")
        self.low = float(low)
        self.high = float(high)

    def _normalize(self, x: XTSeries) -> np.ndarray:
        if len(x) == 0:
            raise InvalidArgument(f"MinMaxNormalizer: series '{x.label}' is empty")
        lo, hi = x.values.min(), x.values.max()
        if hi == lo:
            raise InvalidArgument(f"MinMaxNormalizer: series '{x.label}' is constant")
        return self.low + (x.values - lo) * (self.high - self.low) / (hi - lo)

    def apply(self, data: Sequence[XTSeries]) -> List[XTSeries]:
        return _map_series(data, self._normalize, "MinMaxNormalizer")


def load_series_csv(path: str, columns: Optional[Sequence[str]] = None) -> List[XTSeries]:
    """
    Read a CSV file with one time series per column.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If a requested column is missing.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Time series CSV not found at: {path}")

    df = pd.read_csv(path)
    if columns is None:
        columns = list(df.columns)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"Missing column(s) in {path}: {missing}. Available columns: {list(df.columns)}")

    return [XTSeries.from_series(df[c].astype(float), label=c) for c in columns]
