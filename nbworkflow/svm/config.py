"""
Configuration of support vector machines.

A SVM configuration has three parts:

- formulation: type of SVM problem (C-SVC or nu-SVC) and its penalty
- kernel: kernel function and its parameters, for non-separable data
- execution: training parameters (cache size, tolerance, cross-validation folds)

Each part writes its own keyword arguments into the parameter dictionary
passed to scikit-learn's SVC / NuSVC. Configurations can also be read from
config/svm.yaml.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from sklearn.svm import SVC, NuSVC

from nbworkflow.core.errors import InvalidArgument
from nbworkflow.utils.training_utils import load_yaml_config


DEFAULT_SVM_CONFIG_PATH = "config/svm.yaml"

DEFAULT_CACHE = 25000
DEFAULT_EPS = 1e-3

FORMULATIONS = ("c_svc", "nu_svc")
KERNELS = ("linear", "poly", "rbf", "sigmoid")


# ---------------------------------------------------------------------------
# Configuration items
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SVMFormulation:
    """Type of SVM problem: C-SVC (penalty ``c``) or nu-SVC (``nu``)."""

    svm_type: str = "c_svc"
    c: float = 1.0
    nu: float = 0.5

    def __post_init__(self) -> None:
        if self.svm_type not in FORMULATIONS:
            raise InvalidArgument(f"SVMFormulation: unknown type '{self.svm_type}', expected one of {FORMULATIONS}")
        if self.svm_type == "c_svc" and self.c <= 0.0:
            raise InvalidArgument(f"SVMFormulation: C must be > 0, got {self.c}")
        if self.svm_type == "nu_svc" and not 0.0 < self.nu <= 1.0:
            raise InvalidArgument(f"SVMFormulation: nu must be in (0, 1], got {self.nu}")

    @classmethod
    def c_svc(cls, c: float = 1.0) -> "SVMFormulation":
        return cls("c_svc", c=c)

    @classmethod
    def nu_svc(cls, nu: float = 0.5) -> "SVMFormulation":
        return cls("nu_svc", nu=nu)

    def update(self, params: Dict[str, Any]) -> None:
        if self.svm_type == "c_svc":
            params["C"] = float(self.c)
        else:
            params["nu"] = float(self.nu)


@dataclass(frozen=True)
class SVMKernel:
    """Kernel function and its parameters."""

    kernel: str = "rbf"
    gamma: Union[str, float] = "scale"
    degree: int = 3
    coef0: float = 0.0

    def __post_init__(self) -> None:
        if self.kernel not in KERNELS:
            raise InvalidArgument(f"SVMKernel: unknown kernel '{self.kernel}', expected one of {KERNELS}")

    @classmethod
    def linear(cls) -> "SVMKernel":
        return cls("linear")

    @classmethod
    def rbf(cls, gamma: Union[str, float] = "scale") -> "SVMKernel":
        return cls("rbf", gamma=gamma)

    @classmethod
    def poly(cls, degree: int = 3, gamma: Union[str, float] = "scale", coef0: float = 0.0) -> "SVMKernel":
        return cls("poly", gamma=gamma, degree=degree, coef0=coef0)

    @classmethod
    def sigmoid(cls, gamma: Union[str, float] = "scale", coef0: float = 0.0) -> "SVMKernel":
        return cls("sigmoid", gamma=gamma, coef0=coef0)

    def update(self, params: Dict[str, Any]) -> None:
        params["kernel"] = self.kernel
        if self.kernel != "linear":
            params["gamma"] = self.gamma
        if self.kernel == "poly":
            params["degree"] = int(self.degree)
        if self.kernel in ("poly", "sigmoid"):
            params["coef0"] = float(self.coef0)


@dataclass(frozen=True)
class SVMExecution:
    """
    Training parameters.

    ``cache_size`` is in MB, ``eps`` is the stopping tolerance and
    ``n_folds`` the number of cross-validation folds (disabled when <= 0).
    """

    cache_size: float = DEFAULT_CACHE
    eps: float = DEFAULT_EPS
    n_folds: int = -1

    def __post_init__(self) -> None:
        if self.cache_size <= 0:
            raise InvalidArgument(f"SVMExecution: cache size must be > 0, got {self.cache_size}")
        if self.eps <= 0:
            raise InvalidArgument(f"SVMExecution: eps must be > 0, got {self.eps}")
        if self.n_folds == 1:
            raise InvalidArgument("SVMExecution: cross-validation needs at least 2 folds")

    def update(self, params: Dict[str, Any]) -> None:
        params["cache_size"] = float(self.cache_size)
        params["tol"] = float(self.eps)


# ---------------------------------------------------------------------------
# SVM configuration
# ---------------------------------------------------------------------------


class SVMConfig:
    """
    Configuration of a SVM: formulation, kernel and execution parameters.

    Raises
    ------
    InvalidArgument
        If the formulation or the kernel is undefined.
    """

    def __init__(
        self,
        formulation: SVMFormulation,
        kernel: SVMKernel,
        execution: Optional[SVMExecution] = None,
        use_balanced: bool = False,
    ):
        if formulation is None:
            raise InvalidArgument("SVMConfig: formulation of the SVM is undefined")
        if kernel is None:
            raise InvalidArgument("SVMConfig: kernel function of the SVM is undefined")
        self.formulation = formulation
        self.kernel = kernel
        self.execution = execution if execution is not None else SVMExecution()
        self.use_balanced = bool(use_balanced)

    @property
    def eps(self) -> float:
        return self.execution.eps

    @property
    def n_folds(self) -> int:
        return self.execution.n_folds

    @property
    def is_cross_validation(self) -> bool:
        return self.execution.n_folds > 0

    def to_svc_params(self) -> Dict[str, Any]:
        """Keyword arguments for the scikit-learn estimator."""
        params: Dict[str, Any] = {}
        self.formulation.update(params)
        self.kernel.update(params)
        self.execution.update(params)
        return params

    def build_estimator(
        self,
        random_state: Optional[int] = None,
    ) -> Union[SVC, NuSVC]:
        """SVC or NuSVC; classes are reweighted by inverse frequency when ``use_balanced``."""
        params = self.to_svc_params()
        estimator_cls = SVC if self.formulation.svm_type == "c_svc" else NuSVC
        class_weight = "balanced" if self.use_balanced else None
        return estimator_cls(random_state=random_state, class_weight=class_weight, **params)

    def __str__(self) -> str:
        params = self.to_svc_params()
        return (
            f"\nSVM Formulation: {self.formulation.svm_type}"
            f"\nKernel: {self.kernel.kernel}"
            f"\nParameters: {params}"
            f"\nCross-validation folds: {self.n_folds if self.is_cross_validation else 'none'}"
            f"\nBalanced class weights: {self.use_balanced}"
        )


def load_svm_config(config_path: str = DEFAULT_SVM_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load config/svm.yaml.

    Raises
    ------
    FileNotFoundError, ValueError, KeyError
        If the file is missing, empty, or has no "svm" section.
    """
    return load_yaml_config(config_path, required_sections=("svm",), kind="SVM config")


def svm_config_from_dict(cfg: Dict[str, Any]) -> SVMConfig:
    """
    Build an SVMConfig from the "svm" section of config/svm.yaml.
    """
    scfg = cfg["svm"]
    fcfg = scfg.get("formulation", {}) or {}
    kcfg = scfg.get("kernel", {}) or {}
    ecfg = scfg.get("execution", {}) or {}

    formulation = SVMFormulation(
        svm_type=str(fcfg.get("type", "c_svc")).lower(),
        c=float(fcfg.get("C", 1.0)),
        nu=float(fcfg.get("nu", 0.5)),
    )
    kernel = SVMKernel(
        kernel=str(kcfg.get("type", "rbf")).lower(),
        gamma=kcfg.get("gamma", "scale"),
        degree=int(kcfg.get("degree", 3)),
        coef0=float(kcfg.get("coef0", 0.0)),
    )
    execution = SVMExecution(
        cache_size=float(ecfg.get("cache_size", DEFAULT_CACHE)),
        eps=float(ecfg.get("eps", DEFAULT_EPS)),
        n_folds=int(ecfg.get("n_folds", -1)),
    )
    return SVMConfig(formulation, kernel, execution, use_balanced=bool(scfg.get("use_balanced", False)))
