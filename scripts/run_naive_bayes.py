"""
Train and evaluate a Naive Bayes classifier.

This script is a convenience wrapper around
`nbworkflow.training.train_bayes.train_and_evaluate_naive_bayes`, which:

- loads the configured dataset
- trains a binomial or multinomial Naive Bayes model
- evaluates it on the test set
- writes metrics under experiments/results/
- saves the trained model under experiments/models/

Usage (from project root):

    python -m scripts.run_naive_bayes
    # or
    python scripts/run_naive_bayes.py --bayes-config config/bayes.yaml
"""

from __future__ import annotations

import argparse

from nbworkflow.training.train_bayes import train_and_evaluate_naive_bayes
from nbworkflow.utils.training_utils import get_logger, load_train_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Train and evaluate a Naive Bayes classifier."
    )
    parser.add_argument(
        "--data-config",
        type=str,
        default="config/data.yaml",
        help="Path to data config YAML (default: config/data.yaml).",
    )
    parser.add_argument(
        "--bayes-config",
        type=str,
        default="config/bayes.yaml",
        help="Path to Naive Bayes config YAML (default: config/bayes.yaml).",
    )
    parser.add_argument(
        "--train-config",
        type=str,
        default="config/train.yaml",
        help="Path to global train config YAML (default: config/train.yaml).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    train_cfg = load_train_config(args.train_config)
    logger = get_logger(
        name="run_naive_bayes",
        config=train_cfg,
        log_file_suffix="naive_bayes",
    )

    logger.info("=" * 80)
    logger.info("Starting Naive Bayes run.")
    logger.info(
        "Configs: data=%s, bayes=%s, train=%s",
        args.data_config,
        args.bayes_config,
        args.train_config,
    )

    metrics = train_and_evaluate_naive_bayes(
        data_config_path=args.data_config,
        bayes_config_path=args.bayes_config,
        train_config_path=args.train_config,
    )

    logger.info(
        "Completed Naive Bayes run (%s, %s density): f1=%.4f, accuracy=%.4f",
        metrics["model_type"],
        metrics["density"],
        metrics["f1"],
        metrics["accuracy"],
    )


if __name__ == "__main__":
    main()
