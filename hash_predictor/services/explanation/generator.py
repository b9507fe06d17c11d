from hash_predictor.models.schemas import Adjustment, HashAnalysis, RecommendationResult


class ExplanationGenerator:
    """
    Generates human-readable explanations for hash scoring results.

    Every statement references a computed number or flag.
    """

    # Reference values for comparisons
    MAX_ENTROPY = 4.0  # log2(16)

    PATTERN_LABELS = {
        "triple_repeat": "a character repeated three or more times in a row",
        "double_repeat": "a 2-4 character group immediately repeated",
        "sequential_asc": "an ascending hex run such as 0123",
        "sequential_desc": "a descending hex run such as 3210",
        "tail_pattern": "four identical characters at the end",
        "head_pattern": "four identical characters at the start",
        "palindrome": "a palindromic 8-character prefix",
    }

    def generate(
        self,
        analysis: HashAnalysis,
        adjustments: list[Adjustment] | None = None,
        result: RecommendationResult | None = None,
    ) -> list[str]:
        """
        Generate explanations for an analysis.

        Args:
            analysis: Statistics and pattern flags of the hash
            adjustments: Confidence rules applied for one target
            result: Ranked recommendations

        Returns:
            List of explanation strings
        """
        explanations = []

        explanations.extend(self._explain_statistics(analysis))
        explanations.extend(self._explain_patterns(analysis))

        if adjustments:
            explanations.extend(self._explain_adjustments(adjustments))

        if result is not None:
            explanations.extend(self._explain_recommendation(result))

        return explanations

    def _explain_statistics(self, analysis: HashAnalysis) -> list[str]:
        stats = analysis.statistics
        return [
            f"Entropy: {stats.entropy:.3f} bits. {self._interpret_entropy(stats.entropy)}",
            f"Sample score: {stats.score} from fixed primary and secondary positions.",
            f"Checksum: {stats.checksum} (sum of all hex digits).",
            f"Variance: {stats.variance:.2f}. {self._interpret_variance(stats.variance)}",
        ]

    def _explain_patterns(self, analysis: HashAnalysis) -> list[str]:
        flags = analysis.patterns.model_dump()
        found = [self.PATTERN_LABELS[name] for name, present in flags.items() if present]

        if not found:
            return ["No repeat, sequence, edge or palindrome patterns were found."]

        return [f"Detected pattern: {label}." for label in found]

    def _explain_adjustments(self, adjustments: list[Adjustment]) -> list[str]:
        lines = []
        for adjustment in adjustments:
            sign = "+" if adjustment.delta >= 0 else ""
            lines.append(f"Confidence {sign}{adjustment.delta:g}: {adjustment.reason}.")
        return lines

    def _explain_recommendation(self, result: RecommendationResult) -> list[str]:
        best = result.best
        lines = [
            f"Best target: {best.target.value}x with risk-adjusted score "
            f"{best.risk_adjusted_score:.1f} (safety {best.safety_score}, "
            f"confidence {best.confidence})."
        ]

        if len(result.recommendations) > 1:
            runner_up = result.recommendations[1]
            lines.append(
                f"Runner-up: {runner_up.target.value}x at "
                f"{runner_up.risk_adjusted_score:.1f}."
            )

        return lines

    def _interpret_entropy(self, entropy: float) -> str:
        if entropy == 0:
            return "The hash uses a single repeated symbol."
        if entropy >= 3.9:
            return f"Close to the {self.MAX_ENTROPY:g}-bit maximum for hex digits."
        if entropy < 3.5:
            return f"Noticeably below the {self.MAX_ENTROPY:g}-bit maximum; few symbols dominate."
        return "Moderately spread across the hex alphabet."

    def _interpret_variance(self, variance: float) -> str:
        if variance > 6.5:
            return "Digit values are widely spread."
        if variance < 4.0:
            return "Digit values are tightly clustered."
        return "Digit values are moderately spread."
