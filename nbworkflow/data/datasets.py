"""
Labeled numeric datasets described by config/data.yaml.

    dataset:
      path: data/sample/observations.csv
      label_column: label
      feature_columns: [x1, x2]   # empty: every column but the label
      drop_na: true
      drop_duplicates: false

The loader returns real-valued feature columns plus a "label_id" column
holding consecutive integer class ids, which is what the Naive Bayes
trainer (nbworkflow.bayes.training) and the SVM (nbworkflow.svm) expect.
Features are used as stored; normalize them beforehand if needed.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Tuple

import pandas as pd

from nbworkflow.utils.training_utils import load_yaml_config


DEFAULT_DATA_CONFIG_PATH = "config/data.yaml"


def load_data_config(config_path: str = DEFAULT_DATA_CONFIG_PATH) -> Dict[str, Any]:
    """config/data.yaml, which must define the "dataset" and "split" sections."""
    return load_yaml_config(config_path, required_sections=("dataset", "split"), kind="Data config")


def build_label_mapping(labels: pd.Series) -> Dict[Any, int]:
    """
    Map every distinct label value to an integer ID, in sorted order.

    Integer labels already forming 0..n-1 map onto themselves, so a
    {0, 1} label column stays binary (1 being the positive class).
    """
    values = sorted(labels.unique().tolist(), key=lambda v: (str(type(v)), v))
    return {value: i for i, value in enumerate(values)}


def _select_columns(df: pd.DataFrame, label_column: str, feature_columns: Any, source: str) -> List[str]:
    features = list(feature_columns) if feature_columns else [c for c in df.columns if c != label_column]

    absent = [c for c in (label_column, *features) if c not in df.columns]
    if absent:
        raise ValueError(f"{source} has no column(s) {absent}; found {list(df.columns)}")

    non_numeric = [c for c in features if not pd.api.types.is_numeric_dtype(df[c])]
    if non_numeric:
        raise ValueError(f"{source}: feature column(s) {non_numeric} are not numeric")
    return features


def load_labeled_dataset(
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
) -> Tuple[pd.DataFrame, List[str], Dict[Any, int]]:
    """
    Read, clean and label-encode the configured dataset.

    Parameters
    ----------
    config_path : str, optional
        Location of the data configuration.

    Returns
    -------
    Tuple[pd.DataFrame, List[str], Dict[Any, int]]
        ``(df, feature_columns, label_mapping)``: the cleaned rows (feature
        columns, label column and "label_id"), the feature names in order,
        and the raw label → id mapping.

    Raises
    ------
    FileNotFoundError
        If the CSV file is missing.
    ValueError
        On missing or non-numeric columns, or when cleaning leaves no row.
    """
    dataset_cfg = load_data_config(config_path)["dataset"]

    csv_path = dataset_cfg.get("path", "data/sample/observations.csv")
    label_column = dataset_cfg.get("label_column", "label")
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"Dataset CSV not found at: {csv_path}")

    raw = pd.read_csv(csv_path)
    features = _select_columns(raw, label_column, dataset_cfg.get("feature_columns"), csv_path)

    df = raw[[*features, label_column]]
    if dataset_cfg.get("drop_na", True):
        df = df.dropna()
    if dataset_cfg.get("drop_duplicates", False):
        df = df.drop_duplicates()
    if df.empty:
        raise ValueError(f"{csv_path}: no rows left after cleaning")

    label_mapping = build_label_mapping(df[label_column])
    df = df.assign(label_id=df[label_column].map(label_mapping).astype(int)).reset_index(drop=True)
    return df, features, label_mapping
