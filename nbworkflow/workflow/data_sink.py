"""
Persistence of workflow output to the local file system.

DataSink is a PipeOperator, so it can terminate a chain of transforms:
it writes a list of time series as CSV (one column per series, one row per
time step) and returns the number of rows written. It can also write plain
content or a single vector.

Write failures are logged and re-raised.
"""

from __future__ import annotations

import logging
import os
from typing import List, Sequence

import numpy as np
import pandas as pd

from nbworkflow.core.errors import DimensionMismatch, InvalidArgument
from nbworkflow.utils.training_utils import ensure_dir_exists
from nbworkflow.workflow.pipe_operator import PipeOperator
from nbworkflow.workflow.series import XTSeries


logger = logging.getLogger(__name__)

CSV_DELIM = ","


class DataSink(PipeOperator):
    """
    CSV sink for time series.

    Parameters
    ----------
    sink_path : str
        Path of the output file. Parent directories are created on write.

    Raises
    ------
    InvalidArgument
        If the path is undefined or shorter than two characters.
    """

    def __init__(self, sink_path: str):
        if sink_path is None or len(str(sink_path)) < 2:
            raise InvalidArgument("DataSink: name of the storage is undefined")
        self.sink_path = str(sink_path)

    def _prepare(self) -> None:
        ensure_dir_exists(os.path.dirname(self.sink_path))

    def write(self, content: str) -> bool:
        """
        Write raw content to the sink.

        Raises
        ------
        InvalidArgument
            If the content is undefined or shorter than two characters.
        OSError
            If the file cannot be written.
        """
        if content is None or len(content) < 2:
            raise InvalidArgument("DataSink.write: content is undefined")
        try:
            self._prepare()
            with open(self.sink_path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError:
            logger.exception("DataSink.write: failed writing into %s", self.sink_path)
            raise
        return True

    def write_vector(self, values: Sequence[float]) -> bool:
        """Write a vector as a single comma-separated line."""
        if values is None or len(values) == 0:
            raise InvalidArgument("DataSink.write_vector: cannot persist an undefined vector")
        return self.write(CSV_DELIM.join(str(v) for v in np.asarray(values).ravel()))

    def apply(self, data: List[XTSeries]) -> int:
        """
        Write a list of time series of equal length.

        Returns
        -------
        int
            Number of rows (time steps) written.

        Raises
        ------
        InvalidArgument
            If the list is undefined or empty.
        DimensionMismatch
            If the series have different lengths.
        """
        if data is None or len(data) == 0:
            raise InvalidArgument("DataSink: no time series to persist")

        n_rows = len(data[0])
        for xt in data[1:]:
            if len(xt) != n_rows:
                raise DimensionMismatch(
                    f"DataSink: series '{xt.label}' has {len(xt)} values, expected {n_rows}",
                    expected=n_rows,
                    actual=len(xt),
                )

        df = pd.DataFrame(
            np.column_stack([xt.values for xt in data]),
            columns=[xt.label for xt in data],
        )
        try:
            self._prepare()
            df.to_csv(self.sink_path, index=False, sep=CSV_DELIM)
        except OSError:
            logger.exception("DataSink: failed writing %d series into %s", len(data), self.sink_path)
            raise

        logger.info("DataSink: wrote %d rows x %d series to %s", n_rows, len(data), self.sink_path)
        return n_rows
