"""
Probability density functions used by the Naive Bayes models.

A density is any callable taking a variable number of scalar parameters and
returning a probability (or probability density). The Naive Bayes models
call it once per feature as ``density(*feature_stats, x)``, i.e. the
class's per-feature statistics come first and the observed value last:

- gauss(mean, std_dev, x)
- bernoulli(p, x)
- poisson(rate, x)

Densities are looked up by name through DENSITIES so that a trained model
can be persisted and reloaded (see nbworkflow.bayes.model).
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Optional

from nbworkflow.core.errors import InvalidArgument


Density = Callable[..., float]

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def gauss(mean: float, std_dev: float, x: float) -> float:
    """
    Gaussian probability density of ``x`` for N(mean, std_dev^2).

    Raises
    ------
    InvalidArgument
        If std_dev is not strictly positive.
    """
    if std_dev <= 0.0:
        raise InvalidArgument(f"gauss: standard deviation must be > 0, got {std_dev}")
    y = (x - mean) / std_dev
    return _INV_SQRT_2PI * math.exp(-0.5 * y * y) / std_dev


def bernoulli(p: float, x: float) -> float:
    """Probability of observing ``x`` (non-zero means 'present') with P(present) = p."""
    if not 0.0 <= p <= 1.0:
        raise InvalidArgument(f"bernoulli: probability must be in [0, 1], got {p}")
    return p if x != 0 else 1.0 - p


def poisson(rate: float, x: float) -> float:
    """Poisson probability of a count ``x`` for the given rate."""
    if rate <= 0.0:
        raise InvalidArgument(f"poisson: rate must be > 0, got {rate}")
    k = int(round(x))
    if k < 0:
        return 0.0
    # Computed in log-space: rate^k overflows for large counts.
    return math.exp(k * math.log(rate) - rate - math.lgamma(k + 1))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

DENSITIES: Dict[str, Density] = {
    "gauss": gauss,
    "bernoulli": bernoulli,
    "poisson": poisson,
}


def get_density(name: str) -> Density:
    """
    Return the density registered under ``name``.

    Raises
    ------
    InvalidArgument
        If no density is registered under that name.
    """
    key = str(name).lower()
    if key not in DENSITIES:
        raise InvalidArgument(
            f"Unknown density '{name}'. Available densities: {sorted(DENSITIES)}"
        )
    return DENSITIES[key]


def density_name(density: Density) -> Optional[str]:
    """Reverse lookup of a registered density; None if it is not registered."""
    for name, fn in DENSITIES.items():
        if fn is density:
            return name
    return None
