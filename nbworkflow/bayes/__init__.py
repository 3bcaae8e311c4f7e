"""
Naive Bayes classification.

This subpackage includes:
- probability density functions and their registry
- the per-class Likelihood (prior + feature statistics)
- the binomial and multinomial Naive Bayes models and their persistence
- training helpers that compute likelihoods from a labeled dataset.
"""
