from hash_predictor.models.schemas import HashAnalysis
from hash_predictor.services.analysis.statistics import StatisticalAnalyzer
from hash_predictor.services.detection.pattern_detector import PatternDetector
from hash_predictor.services.preprocessing.validator import HashValidator


class HashAnalyzer:
    """Combines the statistical summary and pattern flags for one hash."""

    def __init__(
        self,
        validator: HashValidator | None = None,
        statistics: StatisticalAnalyzer | None = None,
        detector: PatternDetector | None = None,
    ):
        self.validator = validator or HashValidator()
        self.statistics = statistics or StatisticalAnalyzer(self.validator)
        self.detector = detector or PatternDetector()

    def analyze(self, hash_value: str) -> HashAnalysis:
        """
        Validate the hash, then summarize it.

        Raises:
            InvalidHashError: If the hash is not valid
        """
        hash_value = self.validator.validate(hash_value)

        return HashAnalysis(
            statistics=self.statistics.analyze(hash_value),
            patterns=self.detector.detect(hash_value),
        )
