"""
Composable data-processing workflows.

This subpackage provides:
- the PipeOperator contract and simple operators
- the type-guarded Transform and its composition (Workflow, compose)
- labeled time series with smoothing/normalization operators
- a DataSink that persists time series to CSV.
"""
