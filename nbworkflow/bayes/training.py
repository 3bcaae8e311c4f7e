"""
Training of Naive Bayes models from a labeled dataset.

This module turns a feature matrix X and a label vector y into one
Likelihood per class:

- the prior is the class frequency in y
- the per-feature statistics depend on the density the model will use:
    * gauss     -> (mean, std_dev) per feature
    * bernoulli -> Laplace-smoothed probability that the feature is non-zero
    * poisson   -> mean count per feature

``train_naive_bayes`` then wraps the likelihoods into a binomial model when
the labels are exactly {0, 1}, and into a multinomial model otherwise.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

import numpy as np

from nbworkflow.bayes.density import get_density
from nbworkflow.bayes.likelihood import Likelihood
from nbworkflow.bayes.model import (
    BinomialNaiveBayesModel,
    MultinomialNaiveBayesModel,
    NaiveBayesModel,
)
from nbworkflow.core.errors import DimensionMismatch, InvalidArgument
from nbworkflow.utils.training_utils import load_yaml_config


logger = logging.getLogger(__name__)

DEFAULT_BAYES_CONFIG_PATH = "config/bayes.yaml"

DEFAULT_VAR_SMOOTHING = 1e-9
DEFAULT_ALPHA = 1.0

# Lower bounds keeping the densities well defined on degenerate features.
_MIN_STD = 1e-9
_MIN_RATE = 1e-9


def _validate_dataset(X: Any, y: Any) -> Tuple[np.ndarray, np.ndarray]:
    if X is None or y is None:
        raise InvalidArgument("Cannot train a Naive Bayes model on undefined data")

    X_arr = np.asarray(X, dtype=float)
    y_arr = np.asarray(y).ravel()

    if X_arr.size == 0:
        raise InvalidArgument("Cannot train a Naive Bayes model on an empty dataset")
    if X_arr.ndim != 2:
        raise DimensionMismatch(
            f"Training features must be a 2-D array (n_samples, n_features), got {X_arr.ndim}-D"
        )
    if X_arr.shape[0] != y_arr.shape[0]:
        raise InvalidArgument(
            f"Training set has {X_arr.shape[0]} observations but {y_arr.shape[0]} labels"
        )
    if y_arr.dtype.kind not in "iuf" or (y_arr.dtype.kind == "f" and not np.isfinite(y_arr).all()):
        raise InvalidArgument(f"Class labels must be integers, got values of type {y_arr.dtype}")
    if y_arr.dtype.kind == "f" and np.any(y_arr != np.round(y_arr)):
        raise InvalidArgument("Class labels must be integers, got fractional values")
    return X_arr, y_arr.astype(int)


def _gauss_stats(X_c: np.ndarray, var_floor: float) -> np.ndarray:
    std = np.sqrt(X_c.var(axis=0) + var_floor)
    return np.column_stack([X_c.mean(axis=0), np.maximum(std, _MIN_STD)])


def _bernoulli_stats(X_c: np.ndarray, alpha: float) -> np.ndarray:
    counts = np.count_nonzero(X_c, axis=0)
    return ((counts + alpha) / (X_c.shape[0] + 2.0 * alpha)).reshape(-1, 1)


def _poisson_stats(X_c: np.ndarray) -> np.ndarray:
    return np.maximum(X_c.mean(axis=0), _MIN_RATE).reshape(-1, 1)


def fit_likelihoods(
    X: Any,
    y: Any,
    density: str = "gauss",
    var_smoothing: float = DEFAULT_VAR_SMOOTHING,
    alpha: float = DEFAULT_ALPHA,
) -> List[Likelihood]:
    """
    Compute the likelihood of every class found in ``y``.

    Parameters
    ----------
    X : array-like, shape (n_samples, n_features)
        Real-valued training observations.
    y : array-like, shape (n_samples,)
        Integer class labels.
    density : str
        Name of the density the statistics are computed for
        ("gauss", "bernoulli" or "poisson").
    var_smoothing : float
        Portion of the largest feature variance added to every variance
        (Gaussian only), as scikit-learn's GaussianNB does.
    alpha : float
        Laplace smoothing parameter (Bernoulli only).

    Returns
    -------
    List[Likelihood]
        One likelihood per class, in ascending label order.

    Raises
    ------
    InvalidArgument
        On empty data, mismatched X/y lengths, fewer than two classes or an
        unknown density.
    DimensionMismatch
        If X is not two-dimensional.
    """
    X_arr, y_arr = _validate_dataset(X, y)
    name = str(density).lower()
    get_density(name)

    classes = np.unique(y_arr)
    if classes.size < 2:
        raise InvalidArgument(
            f"Cannot train a Naive Bayes model with a single class: {classes.tolist()}"
        )

    var_floor = float(var_smoothing) * float(X_arr.var(axis=0).max())
    n_samples = X_arr.shape[0]

    likelihoods: List[Likelihood] = []
    for label in classes:
        X_c = X_arr[y_arr == label]
        if name == "gauss":
            stats = _gauss_stats(X_c, var_floor)
        elif name == "bernoulli":
            stats = _bernoulli_stats(X_c, float(alpha))
        else:
            stats = _poisson_stats(X_c)

        likelihoods.append(Likelihood(label=int(label), prior=X_c.shape[0] / n_samples, stats=stats))
        logger.debug("Class %d: %d samples, prior %.4f", label, X_c.shape[0], X_c.shape[0] / n_samples)

    return likelihoods


def train_naive_bayes(
    X: Any,
    y: Any,
    density: str = "gauss",
    var_smoothing: float = DEFAULT_VAR_SMOOTHING,
    alpha: float = DEFAULT_ALPHA,
) -> NaiveBayesModel:
    """
    Train a Naive Bayes model.

    Returns a BinomialNaiveBayesModel when the labels are exactly {0, 1}
    (label 1 being the positive class), a MultinomialNaiveBayesModel
    otherwise. See ``fit_likelihoods`` for the parameters.
    """
    likelihoods = fit_likelihoods(X, y, density=density, var_smoothing=var_smoothing, alpha=alpha)
    density_fn = get_density(density)

    labels = [lk.label for lk in likelihoods]
    if labels == [0, 1]:
        model: NaiveBayesModel = BinomialNaiveBayesModel(
            positives=likelihoods[1],
            negatives=likelihoods[0],
            density=density_fn,
        )
    else:
        model = MultinomialNaiveBayesModel(likelihoods, density_fn)

    logger.info(
        "Trained %s Naive Bayes model (%s density) on %d classes: %s",
        model.model_type,
        density,
        len(labels),
        labels,
    )
    return model


def naive_bayes_params(bayes_cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract ``train_naive_bayes`` keyword arguments from the "naive_bayes"
    section of config/bayes.yaml.
    """
    nb_cfg = bayes_cfg.get("naive_bayes", {}) or {}
    return {
        "density": str(nb_cfg.get("density", "gauss")),
        "var_smoothing": float(nb_cfg.get("var_smoothing", DEFAULT_VAR_SMOOTHING)),
        "alpha": float(nb_cfg.get("alpha", DEFAULT_ALPHA)),
    }


def load_bayes_config(config_path: str = DEFAULT_BAYES_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load config/bayes.yaml.

    Raises
    ------
    FileNotFoundError, ValueError, KeyError
        If the file is missing, empty, or has no "naive_bayes" section.
    """
    return load_yaml_config(config_path, required_sections=("naive_bayes",), kind="Bayes config")
