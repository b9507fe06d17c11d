from typing import ClassVar

from hash_predictor.models.schemas import Adjustment, HashAnalysis, Multiplier
from hash_predictor.services.analysis.hash_analyzer import HashAnalyzer
from hash_predictor.services.analysis.rounding import clamp, round_half_up
from hash_predictor.services.estimation.rules import (
    TARGET_CONFIDENCE_RULES,
    RuleContext,
    resolve_target,
)


class ConfidenceEstimator:
    """
    Maps hash statistics, pattern flags and a target to a 5-98 confidence.

    Starts from a base of 50 and applies additive adjustments:
    - Entropy tiers
    - Score divisibility (11, 7, 5, 3)
    - Pattern flags
    - Variance tiers
    - Checksum divisibility (128, 64, 32)
    - Target-specific bonuses from TARGET_CONFIDENCE_RULES
    """

    BASE: ClassVar[float] = 50
    MIN_CONFIDENCE: ClassVar[int] = 5
    MAX_CONFIDENCE: ClassVar[int] = 98

    def __init__(self, analyzer: HashAnalyzer | None = None):
        self.analyzer = analyzer or HashAnalyzer()

    def estimate(
        self,
        entropy: float,
        score: int,
        target: Multiplier | int | str,
        hash_value: str,
    ) -> int:
        """
        Estimate confidence for one target.

        Args:
            entropy: Entropy of the hash
            score: Weighted sample score of the hash
            target: Target multiplier
            hash_value: The hash itself (for patterns, variance and checksum)

        Returns:
            Confidence clamped to [5, 98]
        """
        target = resolve_target(target)
        analysis = self.analyzer.analyze(hash_value)
        return self.estimate_from_analysis(analysis, target, entropy=entropy, score=score)

    def estimate_from_analysis(
        self,
        analysis: HashAnalysis,
        target: Multiplier | int | str,
        entropy: float | None = None,
        score: int | None = None,
    ) -> int:
        """Estimate confidence from a precomputed analysis."""
        adjustments = self.adjustments(analysis, target, entropy=entropy, score=score)
        total = self.BASE + sum(a.delta for a in adjustments)
        return int(clamp(round_half_up(total), self.MIN_CONFIDENCE, self.MAX_CONFIDENCE))

    def adjustments(
        self,
        analysis: HashAnalysis,
        target: Multiplier | int | str,
        entropy: float | None = None,
        score: int | None = None,
    ) -> list[Adjustment]:
        """
        List every rule that fired, in evaluation order.

        Entropy and score default to the values in the analysis.
        """
        target = resolve_target(target)
        stats = analysis.statistics
        patterns = analysis.patterns
        entropy = stats.entropy if entropy is None else entropy
        score = stats.score if score is None else score

        applied: list[Adjustment] = []

        def add(reason: str, delta: float) -> None:
            applied.append(Adjustment(reason=reason, delta=delta))

        # Entropy tiers
        if entropy > 4.5:
            add("entropy above 4.5", 20)
        elif entropy > 4.2:
            add("entropy above 4.2", 12)
        elif entropy > 3.9:
            add("entropy above 3.9", 8)
        elif entropy < 3.5:
            add("entropy below 3.5", -10)

        # Score divisibility
        if score % 11 == 0:
            add("score divisible by 11", 12)
        if score % 7 == 0:
            add("score divisible by 7", 8)
        if score % 5 == 0:
            add("score divisible by 5", 5)
        if score % 3 == 0:
            add("score divisible by 3", 3)

        # Patterns
        if patterns.triple_repeat:
            add("triple repeat", 15)
        if patterns.double_repeat:
            add("double repeat", 10)
        if patterns.sequential_asc or patterns.sequential_desc:
            add("sequential run", 8)
        if patterns.tail_pattern:
            add("tail run", 18)
        if patterns.head_pattern:
            add("head run", 12)
        if patterns.palindrome:
            add("palindromic prefix", 10)

        # Variance tiers
        if stats.variance > 6.5:
            add("variance above 6.5", 8)
        elif stats.variance < 4.0:
            add("variance below 4.0", -5)

        # Checksum divisibility
        if stats.checksum % 128 == 0:
            add("checksum divisible by 128", 15)
        elif stats.checksum % 64 == 0:
            add("checksum divisible by 64", 10)
        elif stats.checksum % 32 == 0:
            add("checksum divisible by 32", 5)

        # Target-specific table
        table = TARGET_CONFIDENCE_RULES[target]
        add(f"{target.value}x base bonus", table.base)

        context = RuleContext(entropy=entropy, score=score, analysis=analysis)
        for rule in table.rules:
            if rule.applies(context):
                add(f"{target.value}x: {rule.reason}", rule.bonus)

        return applied
