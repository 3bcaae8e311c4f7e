"""
Configuration, filesystem, seeding and logging helpers.

Every entry point of the project (scripts/ and nbworkflow.training) starts
the same way:

- read its YAML files (config/train.yaml plus one file per model family)
- seed the random generators from ``general.random_state``
- build a logger from the ``logging`` section of config/train.yaml

Library modules never configure logging themselves; they only call
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import copy
import logging
import os
import random
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import yaml


DEFAULT_TRAIN_CONFIG_PATH = "config/train.yaml"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Values used when config/train.yaml leaves a key out.
TRAIN_CONFIG_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "general": {"random_state": 42},
    "paths": {
        "results_dir": "experiments/results",
        "models_dir": "experiments/models",
        "logs_dir": "experiments/logs",
        "output_dir": "experiments/output",
    },
    "logging": {"level": "INFO", "to_file": True, "file_prefix": "nbworkflow"},
    "save": {"save_models": True, "overwrite_existing": False},
}


# ---------------------------------------------------------------------------
# YAML configuration
# ---------------------------------------------------------------------------


def load_yaml_config(
    config_path: str,
    required_sections: Iterable[str] = (),
    kind: str = "Config",
) -> Dict[str, Any]:
    """
    Parse a YAML file into a dictionary.

    Parameters
    ----------
    config_path : str
        Location of the YAML file.
    required_sections : Iterable[str]
        Top-level keys the file must define.
    kind : str
        Name of the configuration used in error messages, e.g. "SVM config".

    Returns
    -------
    Dict[str, Any]
        The parsed mapping.

    Raises
    ------
    FileNotFoundError
        If nothing exists at ``config_path``.
    ValueError
        If the file holds no YAML mapping.
    KeyError
        If one of ``required_sections`` is absent.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"{kind} file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)

    if not isinstance(content, dict):
        raise ValueError(f"{kind} file is empty or is not a YAML mapping: {config_path}")

    missing = [s for s in required_sections if s not in content]
    if missing:
        raise KeyError(f"{kind} {config_path} lacks section(s): {', '.join(missing)}")

    return content


def load_train_config(config_path: str = DEFAULT_TRAIN_CONFIG_PATH) -> Dict[str, Any]:
    """
    Read config/train.yaml, filling omitted keys from TRAIN_CONFIG_DEFAULTS.

    Sections other than the known ones are returned untouched.
    """
    cfg = load_yaml_config(config_path, kind="Train config")

    merged = copy.deepcopy(TRAIN_CONFIG_DEFAULTS)
    for section, values in cfg.items():
        if section in merged and isinstance(values, dict):
            merged[section].update(values)
        elif values is not None:
            merged[section] = values
    return merged


# ---------------------------------------------------------------------------
# Filesystem and reproducibility
# ---------------------------------------------------------------------------


def ensure_dir_exists(path: str) -> str:
    """
    Create ``path`` (and its parents) unless it already exists.

    An empty path stands for the working directory and is left alone.
    Returns ``path`` so calls can be chained into ``os.path.join``.
    """
    if path:
        os.makedirs(path, exist_ok=True)
    return path


def seed_everything(seed: int = 42) -> None:
    """Seed the ``random`` module and the legacy NumPy global generator."""
    random.seed(seed)
    np.random.seed(seed)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _log_level(level: Any) -> int:
    """
    Numeric logging level for a name such as "debug" or an int.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level or "INFO").upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _build_handlers(
    logging_cfg: Dict[str, Any],
    logs_dir: str,
    log_file_suffix: Optional[str],
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if logging_cfg.get("to_file", True):
        stem = logging_cfg.get("file_prefix") or "nbworkflow"
        if log_file_suffix:
            stem = f"{stem}_{log_file_suffix}"
        log_path = os.path.join(ensure_dir_exists(logs_dir), f"{stem}.log")
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    return handlers


def get_logger(
    name: str,
    config: Dict[str, Any],
    log_file_suffix: Optional[str] = None,
) -> logging.Logger:
    """
    Logger for an entry point, configured from config/train.yaml.

    Messages go to the console and, when ``logging.to_file`` is set, to
    ``<paths.logs_dir>/<file_prefix>[_<log_file_suffix>].log``. A logger
    that already has handlers is returned as is, so repeated calls do not
    duplicate output.

    Parameters
    ----------
    name : str
        Logger name.
    config : Dict[str, Any]
        Training configuration (see load_train_config).
    log_file_suffix : Optional[str]
        Distinguishes the log files of several entry points, e.g. "svm".

    Returns
    -------
    logging.Logger
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logging_cfg = config.get("logging") or {}
    logs_dir = (config.get("paths") or {}).get("logs_dir", TRAIN_CONFIG_DEFAULTS["paths"]["logs_dir"])
    level = _log_level(logging_cfg.get("level"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in _build_handlers(logging_cfg, logs_dir, log_file_suffix):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger
