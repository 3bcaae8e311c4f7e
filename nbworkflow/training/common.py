"""
Steps shared by the Naive Bayes and SVM training pipelines.

- prepare_split: load the configured dataset and return train/test matrices
- write_metrics: dump a metrics dictionary as JSON under paths.results_dir
- model_output_path: where to save a trained model, or None when saving is
  disabled or would overwrite an existing file against the configuration
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from nbworkflow.data.datasets import load_labeled_dataset
from nbworkflow.data.split import to_arrays, train_test_split_df
from nbworkflow.utils.training_utils import ensure_dir_exists


def prepare_split(
    data_config_path: str,
    logger: logging.Logger,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, List[str]]:
    """
    Returns
    -------
    Tuple
        ``(X_train, y_train, X_test, y_test, feature_columns)``
    """
    df, feature_columns, label_mapping = load_labeled_dataset(config_path=data_config_path)
    train_df, test_df = train_test_split_df(df, config_path=data_config_path)

    logger.info("Dataset: %d rows, features %s, labels %s", len(df), feature_columns, label_mapping)
    logger.info("Split: %d train / %d test rows", len(train_df), len(test_df))

    X_train, y_train = to_arrays(train_df, feature_columns)
    X_test, y_test = to_arrays(test_df, feature_columns)
    return X_train, y_train, X_test, y_test, feature_columns


def log_metrics(logger: logging.Logger, model_name: str, metrics: Dict[str, Any]) -> None:
    logger.info(
        "%s on test split: accuracy=%.4f precision=%.4f recall=%.4f f1=%.4f",
        model_name,
        metrics["accuracy"],
        metrics["precision"],
        metrics["recall"],
        metrics["f1"],
    )


def write_metrics(
    metrics: Dict[str, Any],
    train_cfg: Dict[str, Any],
    model_name: str,
    logger: logging.Logger,
) -> str:
    """Write ``metrics_<model_name>.json`` and return its path."""
    results_dir = ensure_dir_exists(train_cfg["paths"]["results_dir"])
    path = os.path.join(results_dir, f"metrics_{model_name}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(metrics, f, indent=2)
    logger.info("Metrics written to %s", path)
    return path


def model_output_path(
    train_cfg: Dict[str, Any],
    filename: str,
    logger: logging.Logger,
) -> Optional[str]:
    save_cfg = train_cfg.get("save") or {}
    if not save_cfg.get("save_models", True):
        return None

    path = os.path.join(train_cfg["paths"]["models_dir"], filename)
    if os.path.exists(path) and not save_cfg.get("overwrite_existing", False):
        logger.info("Keeping existing model %s (save.overwrite_existing is false)", path)
        return None
    return path
