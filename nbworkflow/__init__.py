"""
Top-level package for nbworkflow, a small supervised-learning toolkit.

This package contains modules for:
- Naive Bayes classification (binomial and multinomial models, densities,
  training from labeled data, model persistence)
- support vector machine configuration and training
- composable data transforms (pipe operators, transforms, time series,
  data sinks)
- dataset loading and splitting
- evaluation metrics
- shared helper functions (configuration, logging, seeding)
"""
