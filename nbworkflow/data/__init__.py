"""
Data loading and splitting utilities.

This subpackage provides:
- functions to load a labeled numeric dataset described by config/data.yaml
- train/test splitting with stratification.
"""
