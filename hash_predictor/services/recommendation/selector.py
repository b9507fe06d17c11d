from typing import ClassVar

from hash_predictor.models.schemas import (
    HashAnalysis,
    Multiplier,
    Recommendation,
    RecommendationResult,
)
from hash_predictor.services.analysis.hash_analyzer import HashAnalyzer
from hash_predictor.services.analysis.rounding import clamp, round_half_up
from hash_predictor.services.estimation.confidence import ConfidenceEstimator
from hash_predictor.services.estimation.delay import DelayEstimator


class RecommendationSelector:
    """
    Ranks every target by a blend of safety and confidence.

    For each target:
    - safety starts at 100 - 0.8 * target, gains pattern bonuses and
      0.4 * (confidence - 50), and is clamped to [5, 100]
    - risk-adjusted score = 0.4 * safety + 0.6 * confidence
    - success rate = 0.88 * confidence, clamped to [10, 95]

    Targets are sorted by risk-adjusted score, descending. The sort is
    stable, so ties keep enumeration order.
    """

    TARGETS: ClassVar[tuple[Multiplier, ...]] = tuple(Multiplier)

    SAFETY_WEIGHT: ClassVar[float] = 0.4
    CONFIDENCE_WEIGHT: ClassVar[float] = 0.6

    def __init__(
        self,
        analyzer: HashAnalyzer | None = None,
        confidence: ConfidenceEstimator | None = None,
        delay: DelayEstimator | None = None,
    ):
        self.analyzer = analyzer or HashAnalyzer()
        self.confidence = confidence or ConfidenceEstimator(self.analyzer)
        self.delay = delay or DelayEstimator(self.analyzer)

    def select(self, hash_value: str) -> RecommendationResult:
        """
        Rank all targets for a hash and pick the best one.

        Args:
            hash_value: 128-character lowercase hex string

        Returns:
            RecommendationResult with the ranked list and the top entry

        Raises:
            InvalidHashError: If the hash is not valid
        """
        analysis = self.analyzer.analyze(hash_value)
        return self.select_from_analysis(analysis)

    def select_from_analysis(self, analysis: HashAnalysis) -> RecommendationResult:
        recommendations = [self.recommend(analysis, target) for target in self.TARGETS]
        recommendations.sort(key=lambda r: r.risk_adjusted_score, reverse=True)

        return RecommendationResult(
            recommendations=recommendations,
            best=recommendations[0],
        )

    def recommend(self, analysis: HashAnalysis, target: Multiplier) -> Recommendation:
        """Build the recommendation record for a single target."""
        confidence = self.confidence.estimate_from_analysis(analysis, target)
        delay = self.delay.estimate_from_analysis(analysis, target)
        safety = self.safety_score(analysis, target, confidence)

        return Recommendation(
            target=target,
            confidence=confidence,
            delay=delay,
            safety_score=safety,
            risk_adjusted_score=safety * self.SAFETY_WEIGHT
            + confidence * self.CONFIDENCE_WEIGHT,
            success_rate=int(clamp(round_half_up(confidence * 0.88), 10, 95)),
        )

    def safety_score(
        self,
        analysis: HashAnalysis,
        target: Multiplier,
        confidence: int,
    ) -> int:
        """Safety falls with the target and rises with strong patterns."""
        safety = 100 - target.value * 0.8

        if analysis.patterns.triple_repeat:
            safety += 5
        if analysis.patterns.tail_pattern:
            safety += 8
        if analysis.statistics.variance > 6.5:
            safety += 5

        safety += (confidence - 50) * 0.4

        return int(clamp(round_half_up(safety), 5, 100))
