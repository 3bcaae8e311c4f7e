"""
Support vector machines.

This subpackage offers:
- SVM configuration (formulation, kernel, execution parameters)
- a trainable SVM classifier usable as a pipe operator, over scikit-learn.
"""
