"""
Per-class statistics of a Naive Bayes model.

A Likelihood holds what a model learned about one class during training:

- the class label
- the prior probability of the class
- per-feature summary statistics (e.g. mean and standard deviation for a
  Gaussian density, or a rate for a Poisson density)

Scoring an observation combines the log-prior with the log-density of every
feature evaluated against that class's statistics. The accumulation is done
in the log domain so that observations with many features do not underflow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

import numpy as np

from nbworkflow.bayes.density import Density
from nbworkflow.core.errors import DimensionMismatch, InvalidArgument


@dataclass(frozen=True, eq=False)
class Likelihood:
    """
    Learned statistics for one class.

    Parameters
    ----------
    label : int
        Class identifier returned by the models when this class wins.
    prior : float
        Prior probability of the class, in [0, 1].
    stats : array-like
        Per-feature statistics, shape (n_features, n_params). A 1-D sequence
        is read as one parameter per feature. Row ``i`` is passed as the
        leading arguments of the density for feature ``i``.
    """

    label: int
    prior: float
    stats: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if self.prior is None or not 0.0 <= float(self.prior) <= 1.0:
            raise InvalidArgument(
                f"Likelihood: prior for class {self.label} must be in [0, 1], got {self.prior}"
            )
        if self.stats is None:
            raise InvalidArgument(f"Likelihood: statistics for class {self.label} are undefined")

        stats = np.array(self.stats, dtype=float)
        if stats.ndim == 1:
            stats = stats.reshape(-1, 1)
        if stats.ndim != 2 or stats.shape[0] == 0:
            raise InvalidArgument(
                f"Likelihood: statistics for class {self.label} must be a non-empty "
                f"(n_features, n_params) array, got shape {stats.shape}"
            )
        stats.setflags(write=False)

        object.__setattr__(self, "label", int(self.label))
        object.__setattr__(self, "prior", float(self.prior))
        object.__setattr__(self, "stats", stats)

    @property
    def n_features(self) -> int:
        return int(self.stats.shape[0])

    def score(self, observation: Sequence[float], density: Density) -> float:
        """
        Log-score of an observation for this class.

        ``log(prior) + sum_i log(density(*stats[i], observation[i]))``

        Parameters
        ----------
        observation : Sequence[float]
            Real-valued feature vector of length n_features.
        density : Density
            Density applied to every feature dimension.

        Returns
        -------
        float
            The log-score; ``-inf`` when the prior or any density is zero.

        Raises
        ------
        InvalidArgument
            If the density is undefined.
        DimensionMismatch
            If the observation length differs from the number of features.
        """
        if density is None or not callable(density):
            raise InvalidArgument("Likelihood.score: density function is undefined")

        x = np.asarray(observation, dtype=float).ravel()
        if x.shape[0] != self.n_features:
            raise DimensionMismatch(
                f"Likelihood.score: observation has {x.shape[0]} features, "
                f"class {self.label} was trained on {self.n_features}",
                expected=self.n_features,
                actual=int(x.shape[0]),
            )

        densities = np.fromiter(
            (density(*params, value) for params, value in zip(self.stats, x)),
            dtype=float,
            count=self.n_features,
        )
        with np.errstate(divide="ignore"):
            return float(np.log(self.prior) + np.log(densities).sum())

    # -----------------------------------------------------------------------
    # Export
    # -----------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "prior": self.prior,
            "stats": self.stats.tolist(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Likelihood":
        try:
            return cls(label=data["label"], prior=data["prior"], stats=data["stats"])
        except KeyError as e:
            raise InvalidArgument(f"Likelihood.from_dict: missing key {e}") from e

    def __str__(self) -> str:
        lines = [f"Class {self.label}: prior={self.prior:.4f}"]
        for i, row in enumerate(self.stats):
            params = ", ".join(f"{v:.4f}" for v in row)
            lines.append(f"  feature {i}: ({params})")
        return "\n".join(lines)
