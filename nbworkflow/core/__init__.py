"""
Core definitions shared by every subpackage.

This subpackage provides the error taxonomy (InvalidArgument,
DimensionMismatch, TypeMismatch) raised by the classifiers and the
workflow layer.
"""
