"""Tests for the recommendation selector and prediction orchestrator."""

import asyncio
import logging

import pytest

from hash_predictor.core.exceptions import InvalidHashError
from hash_predictor.models.schemas import HashAnalysis, Multiplier
from hash_predictor.services.estimation.confidence import ConfidenceEstimator
from hash_predictor.services.pipeline.orchestrator import PredictionOrchestrator
from hash_predictor.services.presentation.sink import CollectingResultSink, LoggingResultSink
from hash_predictor.services.recommendation.selector import RecommendationSelector


class FavorHundredConfidence(ConfidenceEstimator):
    """Confidence stub that makes 100x clearly the strongest target."""

    def estimate_from_analysis(
        self,
        analysis: HashAnalysis,
        target,
        entropy=None,
        score=None,
    ) -> int:
        return 98 if target == Multiplier.X100 else 5


class TestRecommendationSelector:
    """Test suite for ranking targets."""

    @pytest.fixture
    def selector(self):
        return RecommendationSelector()

    def test_ranking_order(self, selector, mixed_hash):
        result = selector.select(mixed_hash)

        order = [r.target for r in result.recommendations]
        assert order == [
            Multiplier.X4,
            Multiplier.X2,
            Multiplier.X3,
            Multiplier.X7,
            Multiplier.X10,
            Multiplier.X100,
        ]

    def test_best_recommendation_fields(self, selector, mixed_hash):
        best = selector.select(mixed_hash).best

        assert best.target == Multiplier.X4
        assert best.confidence == 55
        assert best.delay == 200
        assert best.safety_score == 99
        assert best.risk_adjusted_score == pytest.approx(72.6)
        assert best.success_rate == 48

    def test_safety_scores(self, selector, mixed_hash):
        result = selector.select(mixed_hash)
        safety = {r.target: r.safety_score for r in result.recommendations}

        assert safety == {
            Multiplier.X2: 100,
            Multiplier.X3: 99,
            Multiplier.X4: 99,
            Multiplier.X7: 96,
            Multiplier.X10: 93,
            Multiplier.X100: 22,
        }

    def test_ties_keep_enumeration_order(self, selector, zeros_hash):
        result = selector.select(zeros_hash)

        # 2x..10x all score 0.4 * 100 + 0.6 * 98
        tied = [r for r in result.recommendations if r.risk_adjusted_score == pytest.approx(98.8)]
        assert [r.target for r in tied] == [
            Multiplier.X2,
            Multiplier.X3,
            Multiplier.X4,
            Multiplier.X7,
            Multiplier.X10,
        ]
        assert result.best.target == Multiplier.X2
        assert result.recommendations[-1].target == Multiplier.X100
        assert result.recommendations[-1].safety_score == 52

    def test_success_rate_bounds(self, selector, sha512_hashes):
        for hash_value in sha512_hashes[:10]:
            for r in selector.select(hash_value).recommendations:
                assert 10 <= r.success_rate <= 95
                assert 5 <= r.safety_score <= 100

    def test_selects_hundred_when_it_dominates(self, zeros_hash):
        selector = RecommendationSelector(confidence=FavorHundredConfidence())

        result = selector.select(zeros_hash)

        assert result.best.target == Multiplier.X100
        assert result.best.safety_score == 52
        assert result.best.risk_adjusted_score == pytest.approx(79.6)

    def test_rejects_invalid_hash_before_scoring(self, selector, monkeypatch):
        calls = []

        def spy(*args, **kwargs):
            calls.append(args)
            return 50

        monkeypatch.setattr(ConfidenceEstimator, "estimate_from_analysis", spy)

        with pytest.raises(InvalidHashError):
            selector.select("0" * 127)
        with pytest.raises(InvalidHashError):
            selector.select("g" * 128)

        assert calls == []


class TestPredictionOrchestrator:
    """Test suite for the pipeline entry point."""

    @pytest.fixture
    def orchestrator(self):
        return PredictionOrchestrator(presentation_delay=0)

    def test_predict(self, orchestrator, mixed_hash):
        prediction = orchestrator.predict(mixed_hash, 7)

        assert prediction.target == Multiplier.X7
        assert prediction.confidence == 54
        assert prediction.delay == 350

    def test_predict_strips_whitespace(self, orchestrator, mixed_hash):
        assert orchestrator.predict(f" {mixed_hash} ", "2").confidence == 53

    def test_pre_analyze_shows_bars(self, orchestrator, mixed_hash):
        sink = CollectingResultSink()

        bars = orchestrator.pre_analyze(mixed_hash, sink)

        assert [b.width for b in bars] == ["53%", "53%", "55%", "54%", "52%", "55%"]
        assert sink.payload.confidence_bars == bars

    def test_pre_analyze_ignores_invalid_input(self, orchestrator):
        sink = CollectingResultSink()

        assert orchestrator.pre_analyze("abc", sink) is None
        assert sink.payload.confidence_bars == []
        assert sink.payload.error is None

    def test_recommend(self, orchestrator, mixed_hash):
        assert orchestrator.recommend(mixed_hash).best.target == Multiplier.X4

    def test_auto_select_runs_follow_up(self, orchestrator, mixed_hash):
        sink = CollectingResultSink()
        selected = []

        async def on_selected(target):
            selected.append(target)
            return f"predicted {target.value}x"

        result, outcome = asyncio.run(
            orchestrator.auto_select(mixed_hash, on_selected, sink)
        )

        assert outcome == "predicted 4x"
        assert result.best.target == Multiplier.X4
        assert [r.target.value for r in result.recommendations] == [4, 2, 3, 7, 10, 100]
        assert selected == [Multiplier.X4]
        display = sink.payload.recommendation
        assert display.selected == "4x"
        assert display.safety == "99%"
        assert display.confidence == "55%"
        assert display.delay == "200s"
        assert display.success_rate == "48%"
        assert display.highlight_target == Multiplier.X4

    def test_auto_select_pauses_before_follow_up(self, mixed_hash, monkeypatch):
        orchestrator = PredictionOrchestrator(presentation_delay=1.5)
        events = []

        async def fake_sleep(seconds):
            events.append(("sleep", seconds))

        async def on_selected(target):
            events.append(("selected", target))

        monkeypatch.setattr(
            "hash_predictor.services.pipeline.orchestrator.asyncio.sleep", fake_sleep
        )

        asyncio.run(orchestrator.auto_select(mixed_hash, on_selected, CollectingResultSink()))

        assert events == [("sleep", 1.5), ("selected", Multiplier.X4)]

    def test_auto_select_invalid_hash_shows_error(self, orchestrator):
        sink = CollectingResultSink()

        async def on_selected(target):
            raise AssertionError("should not be called")

        with pytest.raises(InvalidHashError):
            asyncio.run(orchestrator.auto_select("0" * 127, on_selected, sink))

        assert sink.payload.error == "Please enter a valid SHA512 hash first."
        assert sink.payload.recommendation is None

    def test_predict_from_analysis_matches_predict(self, orchestrator, mixed_hash):
        analysis = orchestrator.analyze(mixed_hash)

        for target in Multiplier:
            assert orchestrator.predict_from_analysis(analysis, target) == (
                orchestrator.predict(mixed_hash, target)
            )

    def test_default_sink_logs(self, mixed_hash, caplog):
        orchestrator = PredictionOrchestrator(presentation_delay=0)

        async def on_selected(target):
            return target

        assert isinstance(orchestrator.sink, LoggingResultSink)

        with caplog.at_level(logging.INFO, logger="hash_predictor"):
            orchestrator.pre_analyze(mixed_hash)
            asyncio.run(orchestrator.auto_select(mixed_hash, on_selected))

        assert '"4": "55%"' in caplog.text
        assert "Recommended 4x (safety 99%" in caplog.text

    def test_default_sink_logs_error(self, caplog):
        orchestrator = PredictionOrchestrator(presentation_delay=0)

        async def on_selected(target):
            raise AssertionError("should not be called")

        with caplog.at_level(logging.WARNING, logger="hash_predictor"):
            with pytest.raises(InvalidHashError):
                asyncio.run(orchestrator.auto_select("abc", on_selected))

        assert "Please enter a valid SHA512 hash first." in caplog.text

