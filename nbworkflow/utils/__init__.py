"""
Shared utility functions.

This subpackage includes:
- YAML configuration loading
- seeding and reproducibility helpers
- directory management
- logging helpers used across the project.
"""
