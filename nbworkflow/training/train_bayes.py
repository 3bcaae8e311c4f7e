"""
Naive Bayes training pipeline.

Reads config/data.yaml, config/bayes.yaml and config/train.yaml, trains a
binomial or multinomial model (depending on the labels) on the training
split, scores it on the test split, and writes:

- <results_dir>/metrics_naive_bayes.json
- <models_dir>/model_naive_bayes.json (versioned JSON, see
  nbworkflow.bayes.model.save_model)

Run as a library function or with ``python -m nbworkflow.training.train_bayes``.
"""

from __future__ import annotations

from typing import Any, Dict

from nbworkflow.bayes.model import save_model
from nbworkflow.bayes.training import (
    DEFAULT_BAYES_CONFIG_PATH,
    load_bayes_config,
    naive_bayes_params,
    train_naive_bayes,
)
from nbworkflow.data.datasets import DEFAULT_DATA_CONFIG_PATH
from nbworkflow.evaluation.metrics import compute_classification_metrics
from nbworkflow.training.common import (
    log_metrics,
    model_output_path,
    prepare_split,
    write_metrics,
)
from nbworkflow.utils.training_utils import (
    DEFAULT_TRAIN_CONFIG_PATH,
    get_logger,
    load_train_config,
    seed_everything,
)


MODEL_NAME = "naive_bayes"


def train_and_evaluate_naive_bayes(
    data_config_path: str = DEFAULT_DATA_CONFIG_PATH,
    bayes_config_path: str = DEFAULT_BAYES_CONFIG_PATH,
    train_config_path: str = DEFAULT_TRAIN_CONFIG_PATH,
) -> Dict[str, Any]:
    """
    Train a Naive Bayes model and evaluate it on the test split.

    Parameters
    ----------
    data_config_path : str
        Dataset and split configuration.
    bayes_config_path : str
        Density and smoothing parameters.
    train_config_path : str
        Seeds, output directories, logging and saving options.

    Returns
    -------
    Dict[str, Any]
        "model", "model_type" ("binomial" or "multinomial"), "density" and
        the entries of compute_classification_metrics.
    """
    train_cfg = load_train_config(train_config_path)
    params = naive_bayes_params(load_bayes_config(bayes_config_path))

    seed_everything(int(train_cfg["general"]["random_state"]))
    logger = get_logger(name="train_bayes", config=train_cfg, log_file_suffix="bayes")

    X_train, y_train, X_test, y_test, _ = prepare_split(data_config_path, logger)

    model = train_naive_bayes(X_train, y_train, **params)
    logger.info("Trained model:%s", model)

    metrics = compute_classification_metrics(y_true=y_test, y_pred=model.classify_batch(X_test))
    log_metrics(logger, MODEL_NAME, metrics)

    report = {
        "model": MODEL_NAME,
        "model_type": model.model_type,
        "density": params["density"],
        **metrics,
    }
    write_metrics(report, train_cfg, MODEL_NAME, logger)

    model_path = model_output_path(train_cfg, f"model_{MODEL_NAME}.json", logger)
    if model_path is not None:
        save_model(model, model_path)

    return report


def main() -> None:
    train_and_evaluate_naive_bayes()


if __name__ == "__main__":
    main()
