"""
Basic tests for data loading utilities.

These tests validate that:

- the data configuration can be loaded correctly
- the sample observations load into numeric features and integer labels
- the configured split is stratified and reproducible
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from nbworkflow.data.datasets import (
    build_label_mapping,
    load_data_config,
    load_labeled_dataset,
)
from nbworkflow.data.split import SplitSettings, to_arrays, train_test_split_df


DATA_CONFIG_PATH = "config/data.yaml"


def test_load_data_config_has_required_keys():
    """
    Ensure that config/data.yaml can be loaded and contains core sections.
    """
    cfg = load_data_config(DATA_CONFIG_PATH)

    assert "dataset" in cfg
    assert "split" in cfg
    assert "path" in cfg["dataset"]
    assert "label_column" in cfg["dataset"]
    assert 0.0 < float(cfg["split"]["test_size"]) < 1.0


def test_load_labeled_dataset_returns_numeric_features():
    """The sample dataset loads with its feature columns and a 0/1 label_id column."""
    df, feature_columns, label_mapping = load_labeled_dataset(config_path=DATA_CONFIG_PATH)

    assert not df.empty, "Loaded DataFrame is empty."
    assert feature_columns == ["x1", "x2"]
    assert label_mapping == {0: 0, 1: 1}
    assert "label_id" in df.columns, "Expected 'label_id' column in loaded DataFrame."
    assert df["label_id"].isin([0, 1]).all()


def test_build_label_mapping_is_sorted():
    """Label values map to consecutive ids in sorted order."""
    mapping = build_label_mapping(pd.Series(["spam", "ham", "spam", "eggs"]))
    assert mapping == {"eggs": 0, "ham": 1, "spam": 2}


def test_split_is_stratified():
    """The configured split keeps every row and both classes in the test part."""
    df, feature_columns, _ = load_labeled_dataset(config_path=DATA_CONFIG_PATH)

    train_df, test_df = train_test_split_df(df, config_path=DATA_CONFIG_PATH)

    assert len(train_df) + len(test_df) == len(df)
    assert len(test_df) == int(np.ceil(0.3 * len(df)))
    assert set(test_df["label_id"]) == {0, 1}

    X, y = to_arrays(train_df, feature_columns)
    assert X.shape == (len(train_df), 2)
    assert y.dtype.kind == "i"


def test_split_requires_label_column():
    """Splitting on an absent label column raises KeyError."""
    with pytest.raises(KeyError):
        train_test_split_df(pd.DataFrame({"x1": [0.0, 1.0]}), config_path=DATA_CONFIG_PATH)


def test_missing_dataset_raises(tmp_path):
    """A dataset path that does not exist raises FileNotFoundError."""
    cfg = tmp_path / "data.yaml"
    cfg.write_text(
        f"dataset:\n  path: {tmp_path / 'missing.csv'}\nsplit:\n  test_size: 0.3\n",
        encoding="utf-8",
    )
    with pytest.raises(FileNotFoundError):
        load_labeled_dataset(config_path=str(cfg))


def test_non_numeric_features_are_rejected(tmp_path):
    """Text feature columns are refused with ValueError."""
    csv_path = tmp_path / "obs.csv"
    pd.DataFrame({"x1": ["a", "b"], "label": [0, 1]}).to_csv(csv_path, index=False)
    cfg = tmp_path / "data.yaml"
    cfg.write_text(
        f"dataset:\n  path: {csv_path}\n  label_column: label\nsplit:\n  test_size: 0.3\n",
        encoding="utf-8",
    )

    with pytest.raises(ValueError):
        load_labeled_dataset(config_path=str(cfg))


def test_split_settings_defaults_and_validation():
    """Missing split keys take their defaults and test_size must lie in (0, 1)."""
    assert SplitSettings.from_dict({}) == SplitSettings(test_size=0.3, stratify=True, random_state=42)

    with pytest.raises(ValueError):
        SplitSettings.from_dict({"test_size": 1.5})
