"""
Evaluation utilities.

This subpackage offers metric computations (accuracy, precision, recall,
F1-score) and confusion matrices for predicted labels.
"""
