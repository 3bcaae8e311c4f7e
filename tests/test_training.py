"""
Tests for training Naive Bayes models from labeled data.

These tests validate that:

- priors and per-feature statistics are computed per class
- each supported density gets the statistics it expects
- train_naive_bayes picks the binomial model for {0, 1} labels and the
  multinomial model otherwise
- malformed training sets are rejected
- config/bayes.yaml is loaded and validated
"""

from __future__ import annotations

import numpy as np
import pytest

from nbworkflow.bayes.model import BinomialNaiveBayesModel, MultinomialNaiveBayesModel
from nbworkflow.bayes.training import (
    fit_likelihoods,
    load_bayes_config,
    naive_bayes_params,
    train_naive_bayes,
)
from nbworkflow.core.errors import DimensionMismatch, InvalidArgument


BAYES_CONFIG_PATH = "config/bayes.yaml"


# ---------------------------------------------------------------------------
# Likelihood estimation
# ---------------------------------------------------------------------------


def test_gauss_likelihoods_priors_and_moments():
    """Gaussian training yields class priors, means and standard deviations."""
    X = [[0.0], [2.0], [10.0], [12.0], [14.0]]
    y = [0, 0, 1, 1, 1]

    negatives, positives = fit_likelihoods(X, y, density="gauss")

    assert (negatives.label, positives.label) == (0, 1)
    assert negatives.prior == pytest.approx(0.4)
    assert positives.prior == pytest.approx(0.6)
    assert negatives.stats[0, 0] == pytest.approx(1.0)
    assert negatives.stats[0, 1] == pytest.approx(1.0, rel=1e-6)
    assert positives.stats[0, 0] == pytest.approx(12.0)
    assert positives.stats[0, 1] == pytest.approx(np.sqrt(8.0 / 3.0), rel=1e-6)


def test_gauss_constant_feature_keeps_positive_std():
    """A constant feature still gets a strictly positive deviation."""
    X = [[1.0, 0.0], [1.0, 1.0], [1.0, 5.0], [1.0, 6.0]]
    y = [0, 0, 1, 1]

    for lk in fit_likelihoods(X, y, density="gauss"):
        assert np.all(lk.stats[:, 1] > 0.0)


def test_bernoulli_likelihoods_are_laplace_smoothed():
    """Bernoulli probabilities include Laplace smoothing."""
    X = [[1, 0], [1, 0], [0, 1], [0, 1]]
    y = [0, 0, 1, 1]

    negatives, positives = fit_likelihoods(X, y, density="bernoulli", alpha=1.0)

    np.testing.assert_allclose(negatives.stats[:, 0], [0.75, 0.25])
    np.testing.assert_allclose(positives.stats[:, 0], [0.25, 0.75])


def test_poisson_likelihoods_are_mean_counts():
    """Poisson rates are the per-class mean counts."""
    X = [[1], [2], [8], [9]]
    y = [0, 0, 1, 1]

    negatives, positives = fit_likelihoods(X, y, density="poisson")

    assert negatives.stats[0, 0] == pytest.approx(1.5)
    assert positives.stats[0, 0] == pytest.approx(8.5)


# ---------------------------------------------------------------------------
# Model selection
# ---------------------------------------------------------------------------


def test_train_binomial_gauss_model():
    """{0, 1} labels produce a binomial model that separates the classes."""
    X = [[0.0], [2.0], [10.0], [12.0]]
    y = [0, 0, 1, 1]

    model = train_naive_bayes(X, y)

    assert isinstance(model, BinomialNaiveBayesModel)
    assert model.classify([1.0]) == 0
    assert model.classify([11.0]) == 1


@pytest.mark.parametrize(
    "density, X, low, high",
    [
        ("bernoulli", [[1, 0], [1, 0], [0, 1], [0, 1]], [1, 0], [0, 1]),
        ("poisson", [[1], [2], [8], [9]], [1], [9]),
    ],
)
def test_train_binomial_with_count_densities(density, X, low, high):
    """Bernoulli and Poisson binomial models classify obvious inputs."""
    model = train_naive_bayes(X, [0, 0, 1, 1], density=density)

    assert model.classify(low) == 0
    assert model.classify(high) == 1


def test_train_multinomial_model():
    """Three classes produce a multinomial model that recovers the centers."""
    rng = np.random.default_rng(0)
    centers = {0: (-5.0, 0.0), 1: (0.0, 5.0), 2: (5.0, 0.0)}
    X = np.vstack([rng.normal(c, 0.5, size=(20, 2)) for c in centers.values()])
    y = np.repeat(list(centers), 20)

    model = train_naive_bayes(X, y)

    assert isinstance(model, MultinomialNaiveBayesModel)
    assert model.labels == [0, 1, 2]
    np.testing.assert_array_equal(model.classify_batch(list(centers.values())), [0, 1, 2])


def test_two_classes_not_zero_one_use_multinomial_model():
    """Two classes labeled other than 0/1 use the multinomial model."""
    model = train_naive_bayes([[0.0], [1.0], [9.0], [10.0]], [3, 3, 7, 7])

    assert isinstance(model, MultinomialNaiveBayesModel)
    assert model.classify([9.5]) == 7


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def test_training_rejects_malformed_sets():
    """Empty, undefined, mismatched or single-class training sets are refused."""
    with pytest.raises(InvalidArgument):
        fit_likelihoods([], [])
    with pytest.raises(InvalidArgument):
        fit_likelihoods(None, [0, 1])
    with pytest.raises(InvalidArgument):
        fit_likelihoods([[0.0], [1.0]], [0, 1, 1])
    with pytest.raises(InvalidArgument):
        fit_likelihoods([[0.0], [1.0]], [1, 1])
    with pytest.raises(InvalidArgument):
        fit_likelihoods([[0.0], [1.0]], [0, 1], density="cauchy")
    with pytest.raises(DimensionMismatch):
        fit_likelihoods([0.0, 1.0, 2.0], [0, 1, 1])


def test_training_rejects_non_integer_labels():
    """Fractional or textual labels are refused instead of being truncated or cast."""
    X = [[0.0], [1.0], [5.0], [6.0]]

    with pytest.raises(InvalidArgument):
        fit_likelihoods(X, [0.2, 0.7, 1.4, 1.9])
    with pytest.raises(InvalidArgument):
        fit_likelihoods(X, ["ham", "ham", "spam", "spam"])


def test_training_accepts_integral_float_labels():
    """Labels stored as floats with integral values are used as integers."""
    negatives, positives = fit_likelihoods([[0.0], [1.0], [5.0], [6.0]], [0.0, 0.0, 1.0, 1.0])

    assert (negatives.label, positives.label) == (0, 1)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def test_load_bayes_config_has_naive_bayes_section():
    """config/bayes.yaml provides usable training parameters."""
    cfg = load_bayes_config(BAYES_CONFIG_PATH)
    params = naive_bayes_params(cfg)

    assert params["density"] in {"gauss", "bernoulli", "poisson"}
    assert params["var_smoothing"] >= 0.0
    assert params["alpha"] > 0.0


def test_load_bayes_config_errors(tmp_path):
    """Missing, empty or sectionless Bayes configs are reported."""
    with pytest.raises(FileNotFoundError):
        load_bayes_config(str(tmp_path / "missing.yaml"))

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_bayes_config(str(empty))

    no_section = tmp_path / "other.yaml"
    no_section.write_text("svm:\n  C: 1.0\n", encoding="utf-8")
    with pytest.raises(KeyError):
        load_bayes_config(str(no_section))
