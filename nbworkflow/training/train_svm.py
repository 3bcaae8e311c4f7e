"""
SVM training pipeline.

Same flow as nbworkflow.training.train_bayes, with the classifier built
from config/svm.yaml. The accuracy measured while training (k-fold
cross-validation when ``execution.n_folds`` > 0) is reported as
"train_accuracy" next to the test-split metrics. The fitted estimator is
saved with joblib as <models_dir>/model_svm.joblib.
"""

from __future__ import annotations

from typing import Any, Dict

from nbworkflow.data.datasets import DEFAULT_DATA_CONFIG_PATH
from nbworkflow.evaluation.metrics import compute_classification_metrics
from nbworkflow.svm.config import DEFAULT_SVM_CONFIG_PATH, load_svm_config, svm_config_from_dict
from nbworkflow.svm.model import SVM
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


MODEL_NAME = "svm"


def train_and_evaluate_svm(
    data_config_path: str = DEFAULT_DATA_CONFIG_PATH,
    svm_config_path: str = DEFAULT_SVM_CONFIG_PATH,
    train_config_path: str = DEFAULT_TRAIN_CONFIG_PATH,
) -> Dict[str, Any]:
    """
    Train the SVM and evaluate it on the test split.

    Returns
    -------
    Dict[str, Any]
        "model", "train_accuracy" and the entries of
        compute_classification_metrics.
    """
    train_cfg = load_train_config(train_config_path)
    svm_config = svm_config_from_dict(load_svm_config(svm_config_path))

    seed = int(train_cfg["general"]["random_state"])
    seed_everything(seed)
    logger = get_logger(name="train_svm", config=train_cfg, log_file_suffix="svm")
    logger.info("SVM configuration:%s", svm_config)

    X_train, y_train, X_test, y_test, _ = prepare_split(data_config_path, logger)

    svm = SVM(svm_config, X_train, y_train, random_state=seed)

    metrics = compute_classification_metrics(y_true=y_test, y_pred=svm.apply_batch(X_test))
    log_metrics(logger, MODEL_NAME, metrics)

    report = {"model": MODEL_NAME, "train_accuracy": svm.accuracy, **metrics}
    write_metrics(report, train_cfg, MODEL_NAME, logger)

    model_path = model_output_path(train_cfg, f"model_{MODEL_NAME}.joblib", logger)
    if model_path is not None:
        svm.model.save(model_path)

    return report


def main() -> None:
    train_and_evaluate_svm()


if __name__ == "__main__":
    main()
