"""
Naive Bayes classification models.

This module provides:

- NaiveBayesModel: abstract classifier parameterized by a density function
- BinomialNaiveBayesModel: two-class model (positive vs negative outcome)
- MultinomialNaiveBayesModel: n-class model

plus a versioned dict/JSON representation used to persist trained models
(save_model / load_model / model_from_dict).

Tie-break policies
------------------
- Binomial: the positive class (1) is returned only when its score is
  strictly greater than the negative one; ties resolve to 0.
- Multinomial: the first likelihood, in the order given at construction,
  among those sharing the maximal score wins.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

import numpy as np

from nbworkflow.bayes.density import Density, density_name, get_density
from nbworkflow.bayes.likelihood import Likelihood
from nbworkflow.core.errors import InvalidArgument
from nbworkflow.utils.training_utils import ensure_dir_exists


logger = logging.getLogger(__name__)

MODEL_FORMAT_VERSION = 1


def _check_observation(observation: Any, caller: str) -> np.ndarray:
    if observation is None:
        raise InvalidArgument(f"{caller}: cannot classify an undefined observation")
    x = np.asarray(observation, dtype=float).ravel()
    if x.size == 0:
        raise InvalidArgument(f"{caller}: cannot classify an empty observation")
    if not np.isfinite(x).all():
        raise InvalidArgument(f"{caller}: observation contains NaN or infinite values")
    return x


class NaiveBayesModel(ABC):
    """
    Abstract Naive Bayes model.

    Parameters
    ----------
    density : Density
        Function used to compute the conditional probability of each feature.
        The same density may be shared by several models.

    Raises
    ------
    InvalidArgument
        If the density is undefined.
    """

    model_type: str = ""

    def __init__(self, density: Density):
        if density is None or not callable(density):
            raise InvalidArgument(
                f"{type(self).__name__}: cannot compute conditional probabilities "
                "with an undefined density"
            )
        self.density = density

    @property
    @abstractmethod
    def likelihoods(self) -> List[Likelihood]:
        """Likelihoods of the model, in class order."""

    @property
    def labels(self) -> List[int]:
        return [lk.label for lk in self.likelihoods]

    @abstractmethod
    def classify(self, observation: Sequence[float]) -> int:
        """Return the predicted class label of a single observation."""

    def scores(self, observation: Sequence[float]) -> np.ndarray:
        """Log-score of the observation for every class, in class order."""
        x = _check_observation(observation, f"{type(self).__name__}.scores")
        return np.array([lk.score(x, self.density) for lk in self.likelihoods])

    def classify_batch(self, observations: Any) -> np.ndarray:
        """
        Classify every row of a 2-D array-like of observations.

        Each row is classified independently with the same tie-break policy
        as ``classify``.

        Returns
        -------
        np.ndarray
            Integer array of predicted labels, one per row.
        """
        if observations is None:
            raise InvalidArgument(f"{type(self).__name__}.classify_batch: observations are undefined")
        X = np.asarray(observations, dtype=float)
        if X.ndim == 1:
            X = X.reshape(1, -1)
        if X.shape[0] == 0:
            raise InvalidArgument(f"{type(self).__name__}.classify_batch: no observations to classify")
        return np.array([self.classify(row) for row in X], dtype=int)

    # -----------------------------------------------------------------------
    # Export
    # -----------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """
        Structured, versioned representation of the model.

        Raises
        ------
        InvalidArgument
            If the model density is not a registered density.
        """
        name = density_name(self.density)
        if name is None:
            raise InvalidArgument(
                f"{type(self).__name__}.to_dict: density {self.density!r} is not registered "
                "and cannot be serialized"
            )
        return {
            "format_version": MODEL_FORMAT_VERSION,
            "model_type": self.model_type,
            "density": name,
            "likelihoods": [lk.to_dict() for lk in self.likelihoods],
        }


class BinomialNaiveBayesModel(NaiveBayesModel):
    """
    Binomial (two-class) Naive Bayes model.

    Parameters
    ----------
    positives : Likelihood
        Likelihood of the positive class (predicted as 1).
    negatives : Likelihood
        Likelihood of the negative class (predicted as 0).
    density : Density
        Density used in computing the conditional probability p(C|x).
    """

    model_type = "binomial"

    def __init__(self, positives: Likelihood, negatives: Likelihood, density: Density):
        super().__init__(density)
        if positives is None:
            raise InvalidArgument("BinomialNaiveBayesModel: undefined likelihood for the positive class")
        if negatives is None:
            raise InvalidArgument("BinomialNaiveBayesModel: undefined likelihood for the negative class")
        # classify returns 0/1, so the likelihood labels must agree with it.
        if positives.label != 1 or negatives.label != 0:
            raise InvalidArgument(
                "BinomialNaiveBayesModel: positive and negative classes must be labeled 1 and 0, "
                f"got {positives.label} and {negatives.label}"
            )
        self.positives = positives
        self.negatives = negatives

    @property
    def likelihoods(self) -> List[Likelihood]:
        return [self.negatives, self.positives]

    def classify(self, observation: Sequence[float]) -> int:
        """
        Classify an observation.

        Returns
        -------
        int
            1 if the positive score is strictly greater than the negative
            score, 0 otherwise (ties included).
        """
        x = _check_observation(observation, "BinomialNaiveBayesModel.classify")
        return 1 if self.positives.score(x, self.density) > self.negatives.score(x, self.density) else 0

    def __str__(self) -> str:
        return f"\nPositive cases: {self.positives}\nNegative cases: {self.negatives}"


class MultinomialNaiveBayesModel(NaiveBayesModel):
    """
    Multinomial (n-class) Naive Bayes model.

    The binomial model should be preferred for the two-class problem, where
    the labels are fixed to 0 and 1.

    Parameters
    ----------
    likelihoods : Sequence[Likelihood]
        One likelihood per class. The order is significant: it breaks ties
        between classes with the same score.
    density : Density
        Density used in computing the conditional probability p(C|x).
    """

    model_type = "multinomial"

    def __init__(self, likelihoods: Sequence[Likelihood], density: Density):
        super().__init__(density)
        if likelihoods is None or len(likelihoods) == 0:
            raise InvalidArgument("MultinomialNaiveBayesModel: cannot classify with undefined classes")
        if any(lk is None for lk in likelihoods):
            raise InvalidArgument("MultinomialNaiveBayesModel: undefined likelihood in the class list")
        self._likelihoods = list(likelihoods)

    @property
    def likelihoods(self) -> List[Likelihood]:
        return list(self._likelihoods)

    def classify(self, observation: Sequence[float]) -> int:
        """
        Classify an observation.

        Returns
        -------
        int
            Label of the class with the maximal score. Among tied classes,
            the one that comes first in the construction order wins.
        """
        x = _check_observation(observation, "MultinomialNaiveBayesModel.classify")

        best = self._likelihoods[0]
        best_score = best.score(x, self.density)
        for lk in self._likelihoods[1:]:
            s = lk.score(x, self.density)
            if s > best_score:
                best, best_score = lk, s
        return best.label

    def __str__(self) -> str:
        return "\n".join(str(lk) for lk in self._likelihoods)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def model_from_dict(data: Dict[str, Any]) -> NaiveBayesModel:
    """
    Rebuild a model from the representation produced by ``to_dict``.

    Raises
    ------
    InvalidArgument
        On an unsupported format version, unknown model type or density,
        or missing keys.
    """
    if data is None:
        raise InvalidArgument("model_from_dict: model description is undefined")

    version = data.get("format_version")
    if version != MODEL_FORMAT_VERSION:
        raise InvalidArgument(
            f"model_from_dict: unsupported format version {version!r} "
            f"(expected {MODEL_FORMAT_VERSION})"
        )
    if "likelihoods" not in data or "density" not in data:
        raise InvalidArgument("model_from_dict: 'likelihoods' and 'density' are required")

    density = get_density(data["density"])
    likelihoods = [Likelihood.from_dict(d) for d in data["likelihoods"]]
    model_type = data.get("model_type")

    if model_type == BinomialNaiveBayesModel.model_type:
        if len(likelihoods) != 2:
            raise InvalidArgument(
                f"model_from_dict: binomial model needs 2 likelihoods, got {len(likelihoods)}"
            )
        negatives, positives = likelihoods
        return BinomialNaiveBayesModel(positives, negatives, density)
    if model_type == MultinomialNaiveBayesModel.model_type:
        return MultinomialNaiveBayesModel(likelihoods, density)

    raise InvalidArgument(f"model_from_dict: unknown model type {model_type!r}")


def save_model(model: NaiveBayesModel, path: str) -> str:
    """
    Write a model as JSON to ``path`` and return the path.
    """
    payload = model.to_dict()
    ensure_dir_exists(os.path.dirname(path))
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    logger.info("Saved %s Naive Bayes model to %s", model.model_type, path)
    return path


def load_model(path: str) -> NaiveBayesModel:
    """
    Load a model written by ``save_model``.

    Raises
    ------
    FileNotFoundError
        If the model file does not exist.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Naive Bayes model file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return model_from_dict(data)
