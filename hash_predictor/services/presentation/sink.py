import json
import logging
from abc import ABC, abstractmethod

from hash_predictor.models.schemas import (
    ConfidenceBar,
    DisplayPayload,
    Multiplier,
    Recommendation,
    RecommendationDisplay,
)

logger = logging.getLogger(__name__)


def confidence_bar(target: Multiplier, confidence: int) -> ConfidenceBar:
    return ConfidenceBar(target=target, confidence=confidence, width=f"{confidence}%")


def recommendation_display(recommendation: Recommendation) -> RecommendationDisplay:
    """Format a recommendation the way the result panel shows it."""
    return RecommendationDisplay(
        selected=f"{recommendation.target.value}x",
        safety=f"{recommendation.safety_score}%",
        confidence=f"{recommendation.confidence}%",
        delay=f"{recommendation.delay}s",
        success_rate=f"{recommendation.success_rate}%",
        highlight_target=recommendation.target,
    )


class ResultSink(ABC):
    """
    Presentation collaborator that receives computed results.

    Implementations decide how (and whether) to render them; the
    computation never touches presentation elements directly.
    """

    @abstractmethod
    def show_confidence(self, bars: list[ConfidenceBar]) -> None:
        """Show one confidence bar per target."""
        pass

    @abstractmethod
    def show_recommendation(self, display: RecommendationDisplay) -> None:
        """Show the selected recommendation and highlight its target."""
        pass

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Show a user-facing error message."""
        pass


class LoggingResultSink(ResultSink):
    """Writes everything to the application log."""

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logger

    def show_confidence(self, bars: list[ConfidenceBar]) -> None:
        widths = {bar.target.value: bar.width for bar in bars}
        self.log.info("Confidence bars: %s", json.dumps(widths))

    def show_recommendation(self, display: RecommendationDisplay) -> None:
        self.log.info(
            "Recommended %s (safety %s, confidence %s, delay %s, success %s)",
            display.selected,
            display.safety,
            display.confidence,
            display.delay,
            display.success_rate,
        )

    def show_error(self, message: str) -> None:
        self.log.warning("Error shown to user: %s", message)


class CollectingResultSink(ResultSink):
    """Records the latest display state so it can be returned over the API."""

    def __init__(self):
        self.payload = DisplayPayload()

    def show_confidence(self, bars: list[ConfidenceBar]) -> None:
        self.payload.confidence_bars = list(bars)

    def show_recommendation(self, display: RecommendationDisplay) -> None:
        self.payload.recommendation = display

    def show_error(self, message: str) -> None:
        self.payload.error = message
