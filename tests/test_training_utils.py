"""
Tests for configuration and logging helpers.
"""

from __future__ import annotations

import logging

import pytest

from nbworkflow.utils.training_utils import (
    TRAIN_CONFIG_DEFAULTS,
    ensure_dir_exists,
    get_logger,
    load_train_config,
    load_yaml_config,
)


def test_load_train_config_fills_defaults(tmp_path):
    """Keys missing from train.yaml take their defaults."""
    path = tmp_path / "train.yaml"
    path.write_text("paths:\n  results_dir: out/results\nextra:\n  key: 1\n", encoding="utf-8")

    cfg = load_train_config(str(path))

    assert cfg["paths"]["results_dir"] == "out/results"
    assert cfg["paths"]["models_dir"] == TRAIN_CONFIG_DEFAULTS["paths"]["models_dir"]
    assert cfg["general"]["random_state"] == 42
    assert cfg["extra"] == {"key": 1}
    # Defaults are copied, never mutated.
    assert TRAIN_CONFIG_DEFAULTS["paths"]["results_dir"] == "experiments/results"


def test_load_yaml_config_errors(tmp_path):
    """Missing files, non-mapping content and absent sections are reported."""
    with pytest.raises(FileNotFoundError):
        load_yaml_config(str(tmp_path / "missing.yaml"))

    scalar = tmp_path / "scalar.yaml"
    scalar.write_text("just a string\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_yaml_config(str(scalar))

    partial = tmp_path / "partial.yaml"
    partial.write_text("dataset: {}\n", encoding="utf-8")
    with pytest.raises(KeyError):
        load_yaml_config(str(partial), required_sections=("dataset", "split"))


def test_ensure_dir_exists_returns_path(tmp_path):
    """Directories are created and the path returned."""
    target = str(tmp_path / "a" / "b")
    assert ensure_dir_exists(target) == target
    assert (tmp_path / "a" / "b").is_dir()
    assert ensure_dir_exists("") == ""


def test_get_logger_writes_log_file(tmp_path):
    """The logger writes to the configured log file and is built once."""
    cfg = {
        "paths": {"logs_dir": str(tmp_path / "logs")},
        "logging": {"level": "debug", "to_file": True, "file_prefix": "run"},
    }

    logger = get_logger("nbworkflow-test-file-logger", cfg, log_file_suffix="unit")
    logger.debug("hello from the test")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert "hello from the test" in (tmp_path / "logs" / "run_unit.log").read_text(encoding="utf-8")

    # A second call reuses the configured logger.
    again = get_logger("nbworkflow-test-file-logger", cfg, log_file_suffix="unit")
    assert again is logger
    assert len(again.handlers) == 2

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
