from typing import ClassVar

from hash_predictor.models.schemas import HashAnalysis, Multiplier
from hash_predictor.services.analysis.hash_analyzer import HashAnalyzer
from hash_predictor.services.analysis.rounding import round_half_up
from hash_predictor.services.estimation.rules import TARGET_DELAY_BONUS, resolve_target


class DelayEstimator:
    """
    Maps hash statistics, pattern flags and a target to a delay in seconds.

    The base is target * 45; the result never drops below target * 40.
    """

    BASE_PER_TARGET: ClassVar[int] = 45
    MIN_PER_TARGET: ClassVar[int] = 40

    def __init__(self, analyzer: HashAnalyzer | None = None):
        self.analyzer = analyzer or HashAnalyzer()

    def estimate(
        self,
        score: int,
        entropy: float,
        target: Multiplier | int | str,
        hash_value: str,
    ) -> int:
        """
        Estimate delay for one target.

        Args:
            score: Weighted sample score of the hash
            entropy: Entropy of the hash
            target: Target multiplier
            hash_value: The hash itself (for patterns, variance and checksum)

        Returns:
            Delay, at least target * 40
        """
        target = resolve_target(target)
        analysis = self.analyzer.analyze(hash_value)
        return self.estimate_from_analysis(analysis, target, score=score, entropy=entropy)

    def estimate_from_analysis(
        self,
        analysis: HashAnalysis,
        target: Multiplier | int | str,
        score: int | None = None,
        entropy: float | None = None,
    ) -> int:
        """Estimate delay from a precomputed analysis."""
        target = resolve_target(target)
        stats = analysis.statistics
        patterns = analysis.patterns
        entropy = stats.entropy if entropy is None else entropy
        score = stats.score if score is None else score

        base = target.value * self.BASE_PER_TARGET

        if entropy > 4.5:
            base += 30
        elif entropy > 4.3:
            base += 20
        elif entropy > 4.0:
            base += 10

        if score % 11 == 0:
            base += 35
        if score % 7 == 0:
            base += 30
        if score % 5 == 0:
            base += 15

        if patterns.triple_repeat:
            base += 25
        if patterns.double_repeat:
            base += 20
        if patterns.sequential_asc or patterns.sequential_desc:
            base += 15
        if patterns.tail_pattern:
            base += 20
        if patterns.palindrome:
            base += 10

        if stats.variance > 7.0:
            base += 15
        elif stats.variance < 4.0:
            base -= 10

        if stats.checksum % 128 == 0:
            base += 40
        elif stats.checksum % 64 == 0:
            base += 25

        base += TARGET_DELAY_BONUS[target]

        min_delay = target.value * self.MIN_PER_TARGET
        return max(min_delay, round_half_up(base))
