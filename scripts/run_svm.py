"""
Train and evaluate the support vector machine.

Thin wrapper around `nbworkflow.training.train_svm.train_and_evaluate_svm`.

Usage (from project root):

    python -m scripts.run_svm
    # or
    python scripts/run_svm.py --svm-config config/svm.yaml
"""

from __future__ import annotations

import argparse

from nbworkflow.training.train_svm import train_and_evaluate_svm
from nbworkflow.utils.training_utils import get_logger, load_train_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Train and evaluate a SVM classifier.")
    parser.add_argument("--data-config", type=str, default="config/data.yaml")
    parser.add_argument("--svm-config", type=str, default="config/svm.yaml")
    parser.add_argument("--train-config", type=str, default="config/train.yaml")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    train_cfg = load_train_config(args.train_config)
    logger = get_logger(name="run_svm", config=train_cfg, log_file_suffix="svm_run")

    logger.info("=" * 80)
    logger.info("Starting SVM run.")

    metrics = train_and_evaluate_svm(
        data_config_path=args.data_config,
        svm_config_path=args.svm_config,
        train_config_path=args.train_config,
    )

    logger.info(
        "Completed SVM run: train accuracy=%.4f, test f1=%.4f",
        metrics["train_accuracy"],
        metrics["f1"],
    )


if __name__ == "__main__":
    main()
