"""
Composable data transforms.

A Transform wraps exactly one PipeOperator together with the type of input
it accepts. Applying it to an input of another type raises TypeMismatch;
``is_defined_at`` lets callers check applicability first.

Transforms compose like functions::

    smooth = Transform(MovingAverage(3), list)
    scale = Transform(ZScoreNormalizer(), list)
    sink = Transform(DataSink("output/series.csv"), list)

    workflow = smooth >> scale >> sink
    n_rows = workflow(series)

``Transform.identity(tp)`` is the neutral element: composing any transform
with the identity transform of the matching type, on either side, behaves
exactly like the transform alone.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence, Union

from nbworkflow.core.errors import InvalidArgument, TypeMismatch
from nbworkflow.workflow.pipe_operator import (
    FunctionOperator,
    IdentityOperator,
    PipeOperator,
)


logger = logging.getLogger(__name__)


class Transform:
    """
    Type-guarded wrapper around a PipeOperator.

    Parameters
    ----------
    op : PipeOperator or callable
        Operator implementing the transformation. Plain callables are
        lifted with FunctionOperator.
    input_type : type or tuple of types
        Inputs accepted by the transform (``isinstance`` semantics).

    Raises
    ------
    InvalidArgument
        If the operator is undefined.
    """

    def __init__(self, op: Union[PipeOperator, Callable[[Any], Any]], input_type: Any = object):
        if op is None:
            raise InvalidArgument("Cannot create a transform with an undefined operator")
        if not isinstance(op, PipeOperator):
            op = FunctionOperator(op)
        self._op = op
        self._input_type = input_type

    @property
    def op(self) -> PipeOperator:
        return self._op

    @property
    def input_type(self) -> Any:
        return self._input_type

    @property
    def is_identity(self) -> bool:
        return isinstance(self._op, IdentityOperator)

    @classmethod
    def identity(cls, input_type: Any = object) -> "Transform":
        """Identity transform for ``input_type``."""
        return cls(IdentityOperator(), input_type)

    def is_defined_at(self, data: Any) -> bool:
        return isinstance(data, self._input_type)

    def apply(self, data: Any) -> Any:
        """
        Apply the wrapped operator.

        Raises
        ------
        TypeMismatch
            If ``data`` is outside the transform's domain.
        """
        if not self.is_defined_at(data):
            raise TypeMismatch(
                f"{self!r} is not defined for input of type {type(data).__name__}"
            )
        return self._op.apply(data)

    def __call__(self, data: Any) -> Any:
        return self.apply(data)

    def then(self, other: "Transform") -> "Transform":
        """Transform applying ``self`` then ``other``."""
        return compose(self, other)

    def __rshift__(self, other: "Transform") -> "Transform":
        return self.then(other)

    def __repr__(self) -> str:
        tp = self._input_type
        tp_name = getattr(tp, "__name__", repr(tp))
        return f"Transform({self._op!r}, input_type={tp_name})"


class Workflow(PipeOperator):
    """
    Ordered chain of transforms, itself usable as a PipeOperator.

    Each stage receives the output of the previous one; the first stage
    that is not defined for its input raises TypeMismatch.
    """

    def __init__(self, *transforms: Transform):
        if any(t is None for t in transforms):
            raise InvalidArgument("Workflow: undefined transform in the chain")
        self.transforms = tuple(t if isinstance(t, Transform) else Transform(t) for t in transforms)

    def apply(self, data: Any) -> Any:
        for i, stage in enumerate(self.transforms):
            logger.debug("Workflow stage %d/%d: %r", i + 1, len(self.transforms), stage)
            data = stage.apply(data)
        return data

    def __len__(self) -> int:
        return len(self.transforms)

    def __repr__(self) -> str:
        return "Workflow(" + " >> ".join(repr(t) for t in self.transforms) + ")"


def compose(first: Transform, second: Transform) -> Transform:
    """
    ``first: A -> B`` composed with ``second: B -> C`` gives ``A -> C``.

    The result accepts the inputs of ``first``.
    """
    if first is None or second is None:
        raise InvalidArgument("compose: cannot compose an undefined transform")
    return Transform(Workflow(first, second), first.input_type)


def compose_all(transforms: Sequence[Transform]) -> Transform:
    """Compose a sequence of transforms; an empty sequence gives the identity."""
    if transforms is None:
        raise InvalidArgument("compose_all: transforms are undefined")
    transforms = list(transforms)
    if not transforms:
        return Transform.identity()
    workflow = Workflow(*transforms)
    return Transform(workflow, workflow.transforms[0].input_type)
