"""
Smooth, normalize and persist a set of time series.

The workflow chains three transforms over the columns of a CSV file:

    MovingAverage(period) >> normalizer >> DataSink(output)

Usage (from project root):

    python scripts/run_series_workflow.py --input data/sample/prices.csv --period 3
"""

from __future__ import annotations

import argparse
import os

from nbworkflow.utils.training_utils import get_logger, load_train_config
from nbworkflow.workflow.data_sink import DataSink
from nbworkflow.workflow.series import (
    MinMaxNormalizer,
    MovingAverage,
    ZScoreNormalizer,
    load_series_csv,
)
from nbworkflow.workflow.transform import Transform, compose_all


NORMALIZERS = {
    "zscore": ZScoreNormalizer,
    "minmax": MinMaxNormalizer,
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the time-series smoothing workflow.")
    parser.add_argument("--input", type=str, default="data/sample/prices.csv")
    parser.add_argument("--output", type=str, default=None,
                        help="Output CSV (default: <paths.output_dir>/smoothed_series.csv).")
    parser.add_argument("--period", type=int, default=3, help="Moving average period.")
    parser.add_argument("--normalizer", choices=sorted(NORMALIZERS), default="zscore")
    parser.add_argument("--train-config", type=str, default="config/train.yaml")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    train_cfg = load_train_config(args.train_config)
    logger = get_logger(name="run_series_workflow", config=train_cfg, log_file_suffix="workflow")

    output = args.output
    if output is None:
        output_dir = (train_cfg.get("paths", {}) or {}).get("output_dir", "experiments/output")
        output = os.path.join(output_dir, "smoothed_series.csv")

    series = load_series_csv(args.input)
    logger.info("Loaded %d series from %s", len(series), args.input)

    workflow = compose_all([
        Transform(MovingAverage(args.period), list),
        Transform(NORMALIZERS[args.normalizer](), list),
        Transform(DataSink(output), list),
    ])

    n_rows = workflow(series)
    logger.info("Workflow wrote %d rows to %s", n_rows, output)


if __name__ == "__main__":
    main()
