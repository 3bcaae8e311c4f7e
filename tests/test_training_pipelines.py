"""
Smoke tests for the main training pipelines.

We verify that:

- the Naive Bayes pipeline runs end-to-end on the sample dataset and saves
  a model that can be loaded back
- the SVM pipeline runs end-to-end on the sample dataset

The sample observations are two well separated clusters, so both
classifiers are also expected to score well on the test split.
"""

from __future__ import annotations

import json
import os

import numpy as np
import pytest
import yaml

from nbworkflow.bayes.model import load_model
from nbworkflow.svm.model import SVMModel
from nbworkflow.training.train_bayes import train_and_evaluate_naive_bayes
from nbworkflow.training.train_svm import train_and_evaluate_svm


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


DATA_CONFIG_PATH = "config/data.yaml"
BAYES_CONFIG_PATH = "config/bayes.yaml"
SVM_CONFIG_PATH = "config/svm.yaml"


@pytest.fixture
def train_config_path(tmp_path):
    """config/train.yaml with every output redirected under tmp_path."""
    cfg = {
        "general": {"random_state": 42},
        "paths": {
            "results_dir": str(tmp_path / "results"),
            "models_dir": str(tmp_path / "models"),
            "logs_dir": str(tmp_path / "logs"),
            "output_dir": str(tmp_path / "output"),
        },
        "logging": {"level": "WARNING", "to_file": False},
        "save": {"save_models": True, "overwrite_existing": True},
    }
    path = tmp_path / "train.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# Naive Bayes pipeline smoke test
# ---------------------------------------------------------------------------


def test_train_naive_bayes_smoke(train_config_path, tmp_path):
    """The Naive Bayes pipeline trains, scores and saves a reloadable model."""
    metrics = train_and_evaluate_naive_bayes(
        data_config_path=DATA_CONFIG_PATH,
        bayes_config_path=BAYES_CONFIG_PATH,
        train_config_path=train_config_path,
    )

    assert metrics["model"] == "naive_bayes"
    assert metrics["model_type"] == "binomial"
    assert metrics["f1"] >= 0.9

    with open(tmp_path / "results" / "metrics_naive_bayes.json", encoding="utf-8") as f:
        assert json.load(f)["accuracy"] == pytest.approx(metrics["accuracy"])

    model = load_model(str(tmp_path / "models" / "model_naive_bayes.json"))
    assert model.classify([-1.0, -1.0]) == 0
    assert model.classify([1.0, 1.0]) == 1


# ---------------------------------------------------------------------------
# SVM pipeline smoke test
# ---------------------------------------------------------------------------


def test_train_svm_smoke(train_config_path, tmp_path):
    """The SVM pipeline trains, scores and saves a reloadable model."""
    metrics = train_and_evaluate_svm(
        data_config_path=DATA_CONFIG_PATH,
        svm_config_path=SVM_CONFIG_PATH,
        train_config_path=train_config_path,
    )

    assert metrics["model"] == "svm"
    assert 0.0 <= metrics["train_accuracy"] <= 1.0
    assert metrics["f1"] >= 0.9
    assert os.path.exists(tmp_path / "results" / "metrics_svm.json")

    model = SVMModel.load(str(tmp_path / "models" / "model_svm.joblib"))
    np.testing.assert_array_equal(model.estimator.predict([[-1.0, -1.0], [1.0, 1.0]]), [0, 1])
