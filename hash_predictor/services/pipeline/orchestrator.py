"""
Prediction orchestrator - the entry point into the scoring pipeline.

Coordinates validation, analysis, estimation, ranking and hand-off to a
result sink.
"""

import asyncio
import logging
from typing import Awaitable, Callable, ClassVar, TypeVar

from hash_predictor.core.exceptions import InvalidHashError
from hash_predictor.models.schemas import (
    ConfidenceBar,
    HashAnalysis,
    Multiplier,
    Prediction,
    RecommendationResult,
)
from hash_predictor.services.analysis.hash_analyzer import HashAnalyzer
from hash_predictor.services.estimation.confidence import ConfidenceEstimator
from hash_predictor.services.estimation.delay import DelayEstimator
from hash_predictor.services.estimation.rules import resolve_target
from hash_predictor.services.preprocessing.validator import HashValidator
from hash_predictor.services.presentation.sink import (
    LoggingResultSink,
    ResultSink,
    confidence_bar,
    recommendation_display,
)
from hash_predictor.services.recommendation.selector import RecommendationSelector

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PredictionOrchestrator:
    """
    Runs the hash scoring pipeline end to end.

    - analyze(): statistics and pattern flags
    - predict(): confidence and delay for one target
    - pre_analyze(): silent per-target confidence pass for live input
    - recommend(): rank all targets
    - auto_select(): recommend, pause for presentation, then hand off
    """

    INVALID_HASH_MESSAGE: ClassVar[str] = "Please enter a valid SHA512 hash first."

    def __init__(
        self,
        validator: HashValidator | None = None,
        analyzer: HashAnalyzer | None = None,
        confidence: ConfidenceEstimator | None = None,
        delay: DelayEstimator | None = None,
        selector: RecommendationSelector | None = None,
        presentation_delay: float = 1.5,
        sink: ResultSink | None = None,
    ):
        self.validator = validator or HashValidator()
        self.analyzer = analyzer or HashAnalyzer(self.validator)
        self.confidence = confidence or ConfidenceEstimator(self.analyzer)
        self.delay = delay or DelayEstimator(self.analyzer)
        self.selector = selector or RecommendationSelector(
            self.analyzer, self.confidence, self.delay
        )
        self.presentation_delay = presentation_delay
        self.sink = sink or LoggingResultSink()

    def analyze(self, hash_value: str) -> HashAnalysis:
        return self.analyzer.analyze(self.validator.normalize(hash_value))

    def predict(
        self,
        hash_value: str,
        target: Multiplier | int | str,
    ) -> Prediction:
        """
        Confidence and delay for one target.

        Raises:
            InvalidHashError: If the hash is not valid
            InvalidTargetError: If the target is not supported
        """
        return self.predict_from_analysis(self.analyze(hash_value), target)

    def predict_from_analysis(
        self,
        analysis: HashAnalysis,
        target: Multiplier | int | str,
    ) -> Prediction:
        target = resolve_target(target)

        return Prediction(
            target=target,
            confidence=self.confidence.estimate_from_analysis(analysis, target),
            delay=self.delay.estimate_from_analysis(analysis, target),
        )

    def confidence_bars(self, analysis: HashAnalysis) -> list[ConfidenceBar]:
        return [
            confidence_bar(target, self.confidence.estimate_from_analysis(analysis, target))
            for target in Multiplier
        ]

    def pre_analyze(
        self,
        hash_value: str,
        sink: ResultSink | None = None,
    ) -> list[ConfidenceBar] | None:
        """
        Refresh per-target confidence bars while the hash is being typed.

        Invalid input is ignored silently. Bars go to the configured sink
        unless another one is given.

        Returns:
            The bars shown, or None if the input was not a valid hash
        """
        if not self.validator.is_valid(hash_value):
            return None

        analysis = self.analyze(hash_value)
        bars = self.confidence_bars(analysis)
        (sink or self.sink).show_confidence(bars)

        stats = analysis.statistics
        logger.debug(
            "Hash analysis: entropy=%.3f score=%d variance=%.2f checksum=%d patterns=%s",
            stats.entropy,
            stats.score,
            stats.variance,
            stats.checksum,
            analysis.patterns.model_dump(),
        )

        return bars

    def recommend(self, hash_value: str) -> RecommendationResult:
        """
        Rank all targets for a hash.

        Raises:
            InvalidHashError: If the hash is not valid
        """
        analysis = self.analyze(hash_value)
        result = self.selector.select_from_analysis(analysis)

        logger.info(
            "Recommended %sx (risk-adjusted %.1f)",
            result.best.target.value,
            result.best.risk_adjusted_score,
        )
        return result

    async def auto_select(
        self,
        hash_value: str,
        on_selected: Callable[[Multiplier], Awaitable[T]],
        sink: ResultSink | None = None,
    ) -> tuple[RecommendationResult, T]:
        """
        Pick the best target, present it, pause, then run the follow-up action.

        Args:
            hash_value: Raw hash input
            on_selected: Follow-up action for the chosen target
            sink: Where the recommendation (or error) is shown; defaults to
                the configured sink

        Returns:
            The ranked recommendations and whatever on_selected returns

        Raises:
            InvalidHashError: If the hash is not valid (after showing the error)
        """
        sink = sink or self.sink

        try:
            result = self.recommend(hash_value)
        except InvalidHashError:
            sink.show_error(self.INVALID_HASH_MESSAGE)
            raise

        sink.show_recommendation(recommendation_display(result.best))

        await asyncio.sleep(self.presentation_delay)

        return result, await on_selected(result.best.target)
