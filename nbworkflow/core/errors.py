"""
Error taxonomy shared by the classifiers and the workflow layer.

Every failure raised by the package is one of the classes below, so that
callers (pipelines, scripts) can decide whether to skip, log or abort on a
malformed observation without parsing messages:

- InvalidArgument: undefined, empty or out-of-range arguments
- DimensionMismatch: data shape disagrees with trained statistics
- TypeMismatch: a Transform applied to an input outside its domain

InvalidArgument and DimensionMismatch subclass ValueError and TypeMismatch
subclasses TypeError, so generic handlers keep working.
"""

from __future__ import annotations

from typing import Optional


class NBWorkflowError(Exception):
    """Base class for all errors raised by nbworkflow."""


class InvalidArgument(NBWorkflowError, ValueError):
    """An argument is undefined, empty or outside its valid range."""


class DimensionMismatch(NBWorkflowError, ValueError):
    """The length or shape of the data disagrees with the expected one."""

    def __init__(self, message: str, expected: Optional[int] = None, actual: Optional[int] = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class TypeMismatch(NBWorkflowError, TypeError):
    """A transform was applied to an input outside its declared domain."""


__all__ = [
    "NBWorkflowError",
    "InvalidArgument",
    "DimensionMismatch",
    "TypeMismatch",
]
