from hash_predictor.services.estimation.confidence import ConfidenceEstimator
from hash_predictor.services.estimation.delay import DelayEstimator

__all__ = [
    "ConfidenceEstimator",
    "DelayEstimator",
]
