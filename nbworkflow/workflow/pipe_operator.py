"""
The pipe operator: unit of composition of every data-processing stage.

A PipeOperator exposes a single operation, ``apply(data)``. Implementations
may hold configuration set at construction time, but ``apply`` must not
mutate shared state as a side effect.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

from nbworkflow.core.errors import InvalidArgument


In = TypeVar("In")
Out = TypeVar("Out")


class PipeOperator(ABC, Generic[In, Out]):
    """Single-method transformation contract ``apply: In -> Out``."""

    @abstractmethod
    def apply(self, data: In) -> Out:
        """Transform ``data``."""

    def __call__(self, data: In) -> Out:
        return self.apply(data)


class FunctionOperator(PipeOperator[In, Out]):
    """Lifts a plain callable into a PipeOperator."""

    def __init__(self, fn: Callable[[In], Out]):
        if fn is None or not callable(fn):
            raise InvalidArgument("FunctionOperator: cannot lift an undefined function")
        self.fn = fn

    def apply(self, data: In) -> Out:
        return self.fn(data)

    def __repr__(self) -> str:
        name = getattr(self.fn, "__name__", repr(self.fn))
        return f"FunctionOperator({name})"


class IdentityOperator(PipeOperator[In, In]):
    """Returns its input unchanged."""

    def apply(self, data: In) -> In:
        return data

    def __repr__(self) -> str:
        return "IdentityOperator()"
