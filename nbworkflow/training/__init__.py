"""
Training pipelines.

This subpackage provides end-to-end functions that load the configured
dataset, train a classifier (Naive Bayes or SVM), evaluate it on the test
split and persist metrics and models under experiments/.
"""
