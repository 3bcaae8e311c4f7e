"""
Scores of a classifier on a held-out split.

Both training pipelines report the same dictionary:

    {"accuracy": ..., "precision": ..., "recall": ..., "f1": ...,
     "confusion_matrix": [[...], ...]}

so metrics of the Naive Bayes models and of the SVM can be compared
directly. For labels {0, 1}, precision, recall and F1 refer to the positive
class (1); with more classes they are macro-averaged.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Union

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    precision_recall_fscore_support,
)


ArrayLike = Union[Sequence[int], np.ndarray]


def default_average(y: ArrayLike) -> str:
    """Averaging mode suited to the labels found in ``y``."""
    return "binary" if set(np.unique(np.asarray(y)).tolist()) <= {0, 1} else "macro"


def compute_classification_metrics(
    y_true: ArrayLike,
    y_pred: ArrayLike,
    average: Optional[str] = None,
    labels: Optional[Sequence[int]] = None,
    output_confusion_matrix: bool = True,
) -> Dict[str, Any]:
    """
    Accuracy, precision, recall and F1 of ``y_pred`` against ``y_true``.

    Parameters
    ----------
    y_true, y_pred : ArrayLike
        True and predicted labels, one per observation.
    average : Optional[str]
        sklearn averaging mode. Chosen by ``default_average`` over both
        label vectors when None.
    labels : Optional[Sequence[int]]
        Row/column order of the confusion matrix (all observed labels,
        sorted, when None).
    output_confusion_matrix : bool
        Add a "confusion_matrix" entry as nested lists, ready for JSON.

    Returns
    -------
    Dict[str, Any]
    """
    truth = np.asarray(y_true)
    predicted = np.asarray(y_pred)
    mode = average or default_average(np.concatenate([truth, predicted]))

    precision, recall, f1, _ = precision_recall_fscore_support(
        truth, predicted, average=mode, zero_division=0
    )
    metrics: Dict[str, Any] = {
        "accuracy": float(accuracy_score(truth, predicted)),
        "precision": float(precision),
        "recall": float(recall),
        "f1": float(f1),
    }
    if output_confusion_matrix:
        metrics["confusion_matrix"] = confusion_matrix(truth, predicted, labels=labels).tolist()
    return metrics
