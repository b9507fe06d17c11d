import re
from typing import ClassVar

from hash_predictor.models.schemas import PatternFlags


class PatternDetector:
    """
    Rule-based pattern detection over the hash text.

    Every flag is an independent string test; none depends on another.
    """

    TRIPLE_REPEAT: ClassVar[re.Pattern[str]] = re.compile(r"(\w)\1{2,}")
    DOUBLE_REPEAT: ClassVar[re.Pattern[str]] = re.compile(r"(\w{2,4})\1{1,}")

    ASCENDING_RUNS: ClassVar[tuple[str, ...]] = (
        "0123", "1234", "2345", "3456", "4567", "5678", "6789",
        "789a", "89ab", "9abc", "abcd", "bcde", "cdef",
    )
    DESCENDING_RUNS: ClassVar[tuple[str, ...]] = (
        "3210", "4321", "5432", "6543", "7654", "8765", "9876",
        "a987", "ba98", "cba9", "dcba", "edcb", "fedc",
    )

    # Four of the same hex digit
    EDGE_RUNS: ClassVar[tuple[str, ...]] = (
        "aaaa", "ffff", "0000", "1111", "2222", "3333", "4444", "5555",
        "6666", "7777", "8888", "9999", "bbbb", "cccc", "dddd", "eeee",
    )

    def detect(self, hash_value: str) -> PatternFlags:
        """
        Evaluate all pattern predicates.

        Args:
            hash_value: Validated hash text

        Returns:
            PatternFlags with one boolean per predicate
        """
        return PatternFlags(
            triple_repeat=self.TRIPLE_REPEAT.search(hash_value) is not None,
            double_repeat=self.DOUBLE_REPEAT.search(hash_value) is not None,
            sequential_asc=self._contains_any(hash_value, self.ASCENDING_RUNS),
            sequential_desc=self._contains_any(hash_value, self.DESCENDING_RUNS),
            tail_pattern=hash_value[-4:] in self.EDGE_RUNS,
            head_pattern=hash_value[:4] in self.EDGE_RUNS,
            palindrome=self._is_palindrome(hash_value[:8]),
        )

    def _contains_any(self, text: str, runs: tuple[str, ...]) -> bool:
        return any(run in text for run in runs)

    def _is_palindrome(self, text: str) -> bool:
        return text == text[::-1]
