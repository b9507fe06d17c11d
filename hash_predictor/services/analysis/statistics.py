import math
from collections import Counter
from typing import ClassVar

from hash_predictor.models.schemas import HashStatistics
from hash_predictor.services.analysis.rounding import round_half_up
from hash_predictor.services.preprocessing.validator import HashValidator


class StatisticalAnalyzer:
    """
    Numeric summary of a 128-character hex hash.

    Computes:
    - Shannon entropy of the character distribution
    - Weighted score from fixed sample positions
    - Checksum (sum of all hex digit values)
    - Population variance of the hex digit values
    """

    # Positions sampled for the weighted score
    PRIMARY_INDEXES: ClassVar[tuple[int, ...]] = (5, 15, 25, 35, 50, 75, 100, 120)
    SECONDARY_INDEXES: ClassVar[tuple[int, ...]] = (10, 20, 40, 60, 80, 110)

    PRIMARY_WEIGHT: ClassVar[float] = 0.7
    SECONDARY_WEIGHT: ClassVar[float] = 0.3

    def __init__(self, validator: HashValidator | None = None):
        self.validator = validator or HashValidator()

    def analyze(self, hash_value: str) -> HashStatistics:
        """
        Compute the full statistical summary.

        Args:
            hash_value: 128-character lowercase hex string

        Returns:
            HashStatistics for the hash

        Raises:
            InvalidHashError: If the hash is not valid
        """
        hash_value = self.validator.validate(hash_value)

        return HashStatistics(
            entropy=self.entropy(hash_value),
            score=self.score(hash_value),
            checksum=self.checksum(hash_value),
            variance=self.variance(hash_value),
        )

    def entropy(self, text: str) -> float:
        """
        Calculate Shannon entropy in bits.

        A hash made of a single repeated symbol has entropy 0; a uniform
        spread over all 16 hex symbols reaches log2(16) = 4.
        """
        n = len(text)
        if n == 0:
            return 0.0

        counter = Counter(text)
        entropy = 0.0

        for count in counter.values():
            p = count / n
            entropy -= p * math.log2(p)

        return entropy

    def score(self, hash_value: str) -> int:
        """Weighted sum of the hex digits at the primary and secondary positions."""
        primary = sum(int(hash_value[i], 16) for i in self.PRIMARY_INDEXES)
        secondary = sum(int(hash_value[i], 16) for i in self.SECONDARY_INDEXES)

        combined = primary * self.PRIMARY_WEIGHT + secondary * self.SECONDARY_WEIGHT
        return round_half_up(combined)

    def checksum(self, hash_value: str) -> int:
        return sum(self._digits(hash_value))

    def variance(self, hash_value: str) -> float:
        """Population variance of the per-character hex digit values."""
        values = self._digits(hash_value)
        if not values:
            return 0.0

        mean = sum(values) / len(values)
        return sum((v - mean) ** 2 for v in values) / len(values)

    def _digits(self, hash_value: str) -> list[int]:
        return [int(c, 16) for c in hash_value]
