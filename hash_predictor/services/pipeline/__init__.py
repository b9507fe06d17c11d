"""
Pipeline services for hash scoring.

Validation -> statistics and patterns -> confidence and delay per target
-> risk-adjusted ranking -> result sink.
"""

from hash_predictor.services.pipeline.orchestrator import PredictionOrchestrator

__all__ = [
    "PredictionOrchestrator",
]
