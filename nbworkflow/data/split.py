"""
Train/test splitting of a loaded dataset.

The "split" section of config/data.yaml controls the split:

    split:
      test_size: 0.3      # fraction of rows held out
      stratify: true      # keep class proportions in both parts
      random_state: 42

``to_arrays`` then turns each part into the (X, y) matrices consumed by
the Naive Bayes trainer and the SVM.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from nbworkflow.data.datasets import DEFAULT_DATA_CONFIG_PATH, load_data_config


@dataclass(frozen=True)
class SplitSettings:
    test_size: float = 0.3
    stratify: bool = True
    random_state: int = 42

    @classmethod
    def from_dict(cls, split_cfg: Dict[str, Any]) -> "SplitSettings":
        split_cfg = split_cfg or {}
        settings = cls(
            test_size=float(split_cfg.get("test_size", cls.test_size)),
            stratify=bool(split_cfg.get("stratify", cls.stratify)),
            random_state=int(split_cfg.get("random_state", cls.random_state)),
        )
        if not 0.0 < settings.test_size < 1.0:
            raise ValueError(f"split.test_size must be in (0, 1), got {settings.test_size}")
        return settings


def get_split_config(config_path: str = DEFAULT_DATA_CONFIG_PATH) -> SplitSettings:
    """Split settings read from config/data.yaml."""
    return SplitSettings.from_dict(load_data_config(config_path)["split"])


def train_test_split_df(
    df: pd.DataFrame,
    label_column: str = "label_id",
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Shuffle ``df`` and cut it into a training part and a test part.

    Both parts get a fresh 0..n-1 index.

    Raises
    ------
    KeyError
        If ``label_column`` is not a column of ``df``.
    ValueError
        If a stratified split is impossible, e.g. a class has a single row.
    """
    if label_column not in df.columns:
        raise KeyError(f"Cannot split on '{label_column}': columns are {list(df.columns)}")

    settings = get_split_config(config_path)
    parts = train_test_split(
        df,
        test_size=settings.test_size,
        random_state=settings.random_state,
        stratify=df[label_column] if settings.stratify else None,
    )
    train_df, test_df = (part.reset_index(drop=True) for part in parts)
    return train_df, test_df


def to_arrays(
    df: pd.DataFrame,
    feature_columns: Sequence[str],
    label_column: str = "label_id",
) -> Tuple[np.ndarray, np.ndarray]:
    """Feature matrix (float) and label vector (int) of a split part."""
    X = df[list(feature_columns)].to_numpy(dtype=float)
    y = df[label_column].to_numpy(dtype=int)
    return X, y
