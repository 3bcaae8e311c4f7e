"""
Support vector machine classifier and its trained model.

SVM trains a scikit-learn estimator from an SVMConfig at construction time
and is a PipeOperator: ``apply(x)`` predicts the label of one observation,
so a trained SVM can be dropped into a workflow like any other stage.

SVMModel keeps the fitted estimator together with the accuracy measured
during training (cross-validated accuracy when the configuration asks for
folds, training accuracy otherwise).
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import joblib
import numpy as np
from sklearn.metrics import accuracy_score
from sklearn.model_selection import cross_val_score

from nbworkflow.core.errors import DimensionMismatch, InvalidArgument
from nbworkflow.svm.config import SVMConfig
from nbworkflow.utils.training_utils import ensure_dir_exists
from nbworkflow.workflow.pipe_operator import PipeOperator


logger = logging.getLogger(__name__)

KERNEL_TYPES = {
    "linear": "Linear kernel",
    "poly": "Polynomial kernel",
    "rbf": "RBF kernel",
    "sigmoid": "Sigmoid kernel",
    "precomputed": "Custom kernel",
}


class SVMModel:
    """
    Fitted SVM estimator and its training accuracy.

    Raises
    ------
    InvalidArgument
        If the estimator is undefined or has not been fitted.
    """

    def __init__(self, estimator: Any, accuracy: float):
        if estimator is None:
            raise InvalidArgument("SVMModel: estimator is undefined")
        if not hasattr(estimator, "support_vectors_"):
            raise InvalidArgument("SVMModel: estimator has not been fitted")
        self.estimator = estimator
        self.accuracy = float(accuracy)

    @property
    def n_features(self) -> int:
        return int(self.estimator.support_vectors_.shape[1])

    def save(self, path: str) -> str:
        ensure_dir_exists(os.path.dirname(path))
        joblib.dump({"estimator": self.estimator, "accuracy": self.accuracy}, path)
        logger.info("Saved SVM model to %s", path)
        return path

    @classmethod
    def load(cls, path: str) -> "SVMModel":
        if not os.path.exists(path):
            raise FileNotFoundError(f"SVM model file not found: {path}")
        payload = joblib.load(path)
        return cls(payload["estimator"], payload["accuracy"])

    def __str__(self) -> str:
        lines = ["SVM model", KERNEL_TYPES.get(self.estimator.kernel, str(self.estimator.kernel))]

        support_vectors = self.estimator.support_vectors_
        if support_vectors.size > 0:
            lines.append("SVM nodes:")
            for sv in support_vectors:
                lines.append(", ".join(f"{i}->{v}" for i, v in enumerate(sv)))

        coefs = self.estimator.dual_coef_
        if coefs.size > 0:
            lines.append("SVM basis functions:")
            for row in coefs:
                lines.append(",".join(str(c) for c in row))

        lines.append(f"Accuracy: {self.accuracy}")
        return "\n".join(lines)


class SVM(PipeOperator):
    """
    Support vector machine classifier trained at construction.

    Parameters
    ----------
    config : SVMConfig
        Formulation, kernel and execution parameters.
    X : array-like, shape (n_samples, n_features)
        Training observations.
    y : array-like, shape (n_samples,)
        Training labels.
    random_state : Optional[int]
        Seed forwarded to the estimator.

    Raises
    ------
    InvalidArgument
        If the configuration or the training set is undefined, empty or
        inconsistent.
    """

    def __init__(self, config: SVMConfig, X: Any, y: Any, random_state: Optional[int] = None):
        if config is None:
            raise InvalidArgument("SVM: configuration is undefined")
        if X is None or y is None:
            raise InvalidArgument("SVM: training set is undefined")

        X_arr = np.asarray(X, dtype=float)
        y_arr = np.asarray(y).ravel()
        if X_arr.ndim != 2 or X_arr.shape[0] == 0:
            raise InvalidArgument(f"SVM: training set must be a non-empty 2-D array, got shape {X_arr.shape}")
        if X_arr.shape[0] != y_arr.shape[0]:
            raise InvalidArgument(f"SVM: {X_arr.shape[0]} observations but {y_arr.shape[0]} labels")
        if np.unique(y_arr).size < 2:
            raise InvalidArgument("SVM: training set must contain at least two classes")

        self.config = config
        self.model = self._train(X_arr, y_arr, random_state)

    def _train(self, X: np.ndarray, y: np.ndarray, random_state: Optional[int]) -> SVMModel:
        estimator = self.config.build_estimator(random_state=random_state)

        if self.config.is_cross_validation:
            scores = cross_val_score(estimator, X, y, cv=self.config.n_folds, scoring="accuracy")
            accuracy = float(scores.mean())
            estimator.fit(X, y)
            logger.info("SVM %d-fold cross-validation accuracy: %.4f", self.config.n_folds, accuracy)
        else:
            estimator.fit(X, y)
            accuracy = float(accuracy_score(y, estimator.predict(X)))
            logger.info("SVM training accuracy: %.4f", accuracy)

        return SVMModel(estimator, accuracy)

    @property
    def accuracy(self) -> float:
        return self.model.accuracy

    def apply(self, data: Any) -> int:
        """
        Predict the label of one observation.

        Raises
        ------
        InvalidArgument
            If the observation is undefined or empty.
        DimensionMismatch
            If its length differs from the number of training features.
        """
        if data is None:
            raise InvalidArgument("SVM: cannot classify an undefined observation")
        x = np.asarray(data, dtype=float).ravel()
        if x.size == 0:
            raise InvalidArgument("SVM: cannot classify an empty observation")
        if x.size != self.model.n_features:
            raise DimensionMismatch(
                f"SVM: observation has {x.size} features, model was trained on {self.model.n_features}",
                expected=self.model.n_features,
                actual=int(x.size),
            )
        return int(self.model.estimator.predict(x.reshape(1, -1))[0])

    def apply_batch(self, X: Any) -> np.ndarray:
        """Predict the labels of every row of ``X``."""
        if X is None:
            raise InvalidArgument("SVM: observations are undefined")
        X_arr = np.asarray(X, dtype=float)
        if X_arr.ndim != 2 or X_arr.shape[0] == 0:
            raise InvalidArgument(f"SVM: observations must be a non-empty 2-D array, got shape {X_arr.shape}")
        if X_arr.shape[1] != self.model.n_features:
            raise DimensionMismatch(
                f"SVM: observations have {X_arr.shape[1]} features, model was trained on {self.model.n_features}",
                expected=self.model.n_features,
                actual=int(X_arr.shape[1]),
            )
        return self.model.estimator.predict(X_arr)
