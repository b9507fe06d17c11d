from hash_predictor.services.presentation.sink import (
    CollectingResultSink,
    LoggingResultSink,
    ResultSink,
)

__all__ = [
    "ResultSink",
    "LoggingResultSink",
    "CollectingResultSink",
]
