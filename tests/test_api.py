"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from hash_predictor.core.config import get_settings
from hash_predictor.dependencies import get_orchestrator
from hash_predictor.main import app
from hash_predictor.services.analysis.hash_analyzer import HashAnalyzer
from hash_predictor.services.pipeline.orchestrator import PredictionOrchestrator

PREFIX = get_settings().api_v1_prefix


@pytest.fixture
def analyze_calls(monkeypatch):
    calls = []
    original = HashAnalyzer.analyze

    def counting_analyze(self, hash_value):
        calls.append(hash_value)
        return original(self, hash_value)

    monkeypatch.setattr(HashAnalyzer, "analyze", counting_analyze)
    return calls


@pytest.fixture
def client():
    app.dependency_overrides[get_orchestrator] = lambda: PredictionOrchestrator(
        presentation_delay=0
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestAnalyzeEndpoint:
    """POST /analyze"""

    def test_analyze(self, client, mixed_hash):
        response = client.post(f"{PREFIX}/analyze", json={"hash": mixed_hash})

        assert response.status_code == 200
        body = response.json()
        assert body["statistics"]["score"] == 53
        assert body["statistics"]["checksum"] == 944
        assert body["patterns"]["palindrome"] is False
        assert [bar["width"] for bar in body["confidence_bars"]] == [
            "53%", "53%", "55%", "54%", "52%", "55%",
        ]
        assert any("Entropy: 3.000" in line for line in body["explanations"])
        assert "X-Process-Time" in response.headers

    def test_invalid_hash(self, client):
        response = client.post(f"{PREFIX}/analyze", json={"hash": "0" * 127})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "InvalidHashError"
        assert body["details"]["length"] == 127

    def test_non_hex_hash(self, client):
        response = client.post(f"{PREFIX}/analyze", json={"hash": "g" * 128})

        assert response.status_code == 400

    @pytest.mark.parametrize(
        "payload",
        [{}, {"hash": ""}, {"hash": None}, {"hash": "0" * 1001}],
        ids=["missing", "empty", "null", "too-long"],
    )
    @pytest.mark.parametrize("path", ["/analyze", "/predict", "/recommend"])
    def test_missing_or_malformed_hash_is_invalid_hash(self, client, path, payload):
        """Every bad hash goes through the InvalidHashError handler, not request validation."""
        response = client.post(f"{PREFIX}{path}", json={**payload, "target": 2})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "InvalidHashError"
        assert "Invalid hash input" in body["message"]


class TestPredictEndpoint:
    """POST /predict"""

    def test_predict(self, client, mixed_hash):
        response = client.post(
            f"{PREFIX}/predict",
            json={"hash": mixed_hash, "target": 7},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["target"] == 7
        assert body["confidence"] == 54
        assert body["delay"] == 350
        assert [a["reason"] for a in body["adjustments"]] == [
            "entropy below 3.5",
            "7x base bonus",
            "7x: variance above 6.0",
        ]

    def test_unsupported_target(self, client, mixed_hash):
        response = client.post(
            f"{PREFIX}/predict",
            json={"hash": mixed_hash, "target": 5},
        )

        assert response.status_code == 422

    def test_hash_analyzed_once(self, client, mixed_hash, analyze_calls):
        response = client.post(
            f"{PREFIX}/predict",
            json={"hash": mixed_hash, "target": 4},
        )

        assert response.status_code == 200
        assert len(analyze_calls) == 1


class TestRecommendEndpoint:
    """POST /recommend"""

    def test_recommend(self, client, mixed_hash):
        response = client.post(f"{PREFIX}/recommend", json={"hash": mixed_hash})

        assert response.status_code == 200
        body = response.json()
        assert body["best"]["target"] == 4
        assert [r["target"] for r in body["recommendations"]] == [4, 2, 3, 7, 10, 100]
        assert body["display"]["selected"] == "4x"
        assert body["display"]["highlight_target"] == 4
        assert "error" not in body["display"]
        assert body["prediction"] is None

    def test_recommend_with_auto_predict(self, client, mixed_hash):
        response = client.post(
            f"{PREFIX}/recommend",
            json={"hash": mixed_hash, "auto_predict": True},
        )

        assert response.status_code == 200
        prediction = response.json()["prediction"]
        assert prediction == {"target": 4, "confidence": 55, "delay": 200}
        assert response.json()["display"]["selected"] == "4x"

    def test_auto_predict_ranks_once(self, client, mixed_hash, analyze_calls):
        """One analysis for the ranking and one for the follow-up prediction."""
        response = client.post(
            f"{PREFIX}/recommend",
            json={"hash": mixed_hash, "auto_predict": True},
        )

        assert response.status_code == 200
        assert len(analyze_calls) == 2

    def test_invalid_hash(self, client):
        response = client.post(f"{PREFIX}/recommend", json={"hash": "abc"})

        assert response.status_code == 400
        assert "Invalid hash input" in response.json()["message"]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
