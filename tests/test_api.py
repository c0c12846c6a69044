"""
API endpoint tests
"""

import pytest
from fastapi.testclient import TestClient

import main


@pytest.fixture
def client():
    """Create test client"""
    main.rate_limiter.requests.clear()
    with TestClient(main.app) as test_client:
        yield test_client
    main.rate_limiter.requests.clear()


def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "service" in data
    assert "version" in data
    assert data["endpoints"]["classify"] == "POST /classify"


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["components"]["detectors"] == 10


def test_metrics_endpoint(client):
    client.post("/classify", json={"headline": "Aliens land"})
    response = client.get("/metrics")
    assert response.status_code == 200
    data = response.json()
    assert data["metrics"]["total_requests"] >= 1
    assert data["metrics"]["headlines_classified"] >= 1


def test_classify_endpoint(client):
    response = client.post("/classify", json={"headline": "BREAKING: New miracle drink discovered!!!"})
    assert response.status_code == 200
    data = response.json()
    assert data["label"] == "fake"
    assert data["confidence"] == 90
    assert data["explanation"]
    assert "details" not in data


def test_classify_with_debug_details(client):
    response = client.post(
        "/classify",
        json={
            "headline": "Researchers at the University of Oxford publish new findings on sleep patterns",
            "debug": True,
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["label"] == "trustworthy"
    assert data["details"]["branch"] == "trustworthy"
    assert data["details"]["signals"] == ["TrustworthyCue"]
    assert data["details"]["trust_score"] == 2.0


def test_blank_headline_is_answered_not_rejected(client):
    response = client.post("/classify", json={"headline": "   "})
    assert response.status_code == 200
    data = response.json()
    assert data["label"] == "fake"
    assert data["confidence"] == 0


def test_classify_validation(client):
    response = client.post("/classify", json={})
    assert response.status_code == 422

    too_long = "word " * (main.settings.max_headline_length // 5 + 1)
    response = client.post("/classify", json={"headline": too_long})
    assert response.status_code == 422


def test_batch_preserves_order(client):
    headlines = [
        "Coffee proven to let people live forever in shocking new report",
        "Government report outlines improvements in national cybersecurity readiness",
        "",
    ]
    response = client.post("/classify/batch", json={"headlines": headlines})
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 3
    assert [r["confidence"] for r in data["results"]] == [94, 65, 0]
    assert [r["label"] for r in data["results"]] == ["fake", "trustworthy", "fake"]


def test_batch_validation(client):
    response = client.post("/classify/batch", json={"headlines": []})
    assert response.status_code == 422

    too_many = ["headline"] * (main.settings.max_batch_size + 1)
    response = client.post("/classify/batch", json={"headlines": too_many})
    assert response.status_code == 422


def test_rate_limit(client, monkeypatch):
    monkeypatch.setattr(main.rate_limiter, "max_requests", 2)
    for _ in range(2):
        assert client.post("/classify", json={"headline": "Aliens land"}).status_code == 200
    response = client.post("/classify", json={"headline": "Aliens land"})
    assert response.status_code == 429
    assert "Rate limit exceeded" in response.json()["detail"]


def test_rate_limit_remaining_header(client, monkeypatch):
    monkeypatch.setattr(main.rate_limiter, "max_requests", 5)
    first = client.post("/classify", json={"headline": "Aliens land"})
    second = client.post("/classify/batch", json={"headlines": ["Aliens land"]})
    assert first.headers["X-RateLimit-Remaining"] == "4"
    assert second.headers["X-RateLimit-Remaining"] == "3"


def test_unhandled_error_is_counted_as_failure(monkeypatch):
    class BrokenScorer:
        def analyze(self, headline):
            raise RuntimeError("scorer exploded")

    main.rate_limiter.requests.clear()
    monkeypatch.setattr(main, "scorer", BrokenScorer())
    before = main.metrics.failed_requests

    with TestClient(main.app, raise_server_exceptions=False) as test_client:
        response = test_client.post("/classify", json={"headline": "Aliens land"})
        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"

        stats = test_client.get("/metrics").json()["metrics"]

    assert main.metrics.failed_requests == before + 1
    assert stats["failed_requests"] == before + 1
    main.rate_limiter.requests.clear()
