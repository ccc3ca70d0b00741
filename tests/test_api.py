"""
Tests for the HTTP layer (`api/app.py`, `api/routes.py`) using FastAPI's
TestClient.  Each test gets a fresh app and a non-realtime session.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from api import routes
from api.app import create_app
from api.session import MeasurementSession
from errors import InvalidSamples
from model.advice import ELEVATED_HR_CONTEXT, advice_options
from model.stress import StressBucket


@pytest.fixture
def session() -> MeasurementSession:
    return MeasurementSession(realtime=False)


@pytest.fixture
def client(session: MeasurementSession) -> Iterator[TestClient]:
    routes.set_session(session)
    with TestClient(create_app()) as c:
        yield c


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


# ── Scoring ───────────────────────────────────────────────────────────────────


def test_classify_default_factors(client: TestClient) -> None:
    response = client.post("/stress/classify", json={"heart_rate": 75, "age": 30})
    assert response.status_code == 200
    body = response.json()
    assert body["level"] == "medium"
    assert body["label"] == "medio"
    assert body["score"] == pytest.approx(0.44)
    assert body["color"] == "#FF9800"


def test_classify_with_factors(client: TestClient) -> None:
    response = client.post(
        "/stress/classify",
        json={"heart_rate": 75, "factors": {"variability": 0.0, "quality": 0.3, "trend": 0.0}},
    )
    assert response.json()["level"] == "low"


def test_classify_invalid_heart_rate(client: TestClient) -> None:
    response = client.post("/stress/classify", json={"heart_rate": 300})
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidHeartRate"


def test_classify_rejects_out_of_range_factor(client: TestClient) -> None:
    response = client.post("/stress/classify", json={"heart_rate": 75, "factors": {"quality": 2}})
    assert response.status_code == 422


def test_signal_endpoints(client: TestClient) -> None:
    quality = client.post("/signal/quality", json={"samples": [1, 2, 3]}).json()
    assert quality == {"value": 0.0, "num_samples": 3}

    hrv = client.post("/signal/hrv", json={"samples": [72] * 12}).json()
    assert hrv["value"] == 0.0

    trend = client.post("/signal/trend", json={"samples": list(range(60, 70))}).json()
    assert trend["value"] == pytest.approx(0.6)


# ── Advice ────────────────────────────────────────────────────────────────────


def test_advice(client: TestClient) -> None:
    response = client.get("/advice/bajo")
    assert response.status_code == 200
    body = response.json()
    assert body["level"] == "low"
    assert body["advice"] in advice_options(StressBucket.LOW)
    assert body["color"] == "#4CAF50"


def test_advice_unknown_level(client: TestClient) -> None:
    assert client.get("/advice/extreme").status_code == 404


def test_interpretation(client: TestClient) -> None:
    response = client.get("/interpretation/ALTO", params={"heart_rate": 110})
    assert response.status_code == 200
    body = response.json()
    assert body["level"] == "high"
    assert body["heart_rate_context"] == ELEVATED_HR_CONTEXT


# ── Measurement flow ─────────────────────────────────────────────────────────


def test_result_before_measurement(client: TestClient) -> None:
    assert client.get("/measurement/result").status_code == 404
    assert client.get("/measurement/status").json()["status"] == "idle"


def test_measurement_flow(client: TestClient, session: MeasurementSession) -> None:
    assert client.post("/profile", json={"age": 40}).status_code == 200

    response = client.post("/measurement/start", json={"duration_seconds": 5, "seed": 1})
    assert response.status_code == 200
    assert session.wait(timeout=10)

    status = client.get("/measurement/status").json()
    assert status["status"] == "complete"
    assert status["progress_percent"] is None

    body = client.get("/measurement/result").json()
    assert body["result"]["stress_level"] in {"low", "medium", "high"}
    assert 60 <= body["result"]["heart_rate"] <= 120
    assert body["label"] in {"bajo", "medio", "alto"}

    assert client.post("/measurement/reset").status_code == 200
    assert client.get("/measurement/status").json()["status"] == "idle"


def test_profile_validation(client: TestClient) -> None:
    assert client.post("/profile", json={"age": -3}).status_code == 422


# ── History ───────────────────────────────────────────────────────────────────


def test_history_summary(client: TestClient) -> None:
    measurements = [
        {"heart_rate": 70, "stress_level": "low", "hrv": 0.1, "quality": 0.9, "quality_percent": 90},
        {"heart_rate": 90, "stress_level": "high", "hrv": 0.3, "quality": 0.8, "quality_percent": 80},
        {"heart_rate": 80, "stress_level": "low", "hrv": 0.2, "quality": 0.7, "quality_percent": 70},
    ]
    response = client.post("/history/summary", json={"measurements": measurements})
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 3
    assert body["average_heart_rate"] == 80
    assert body["counts"] == {"low": 2, "medium": 0, "high": 1}
    assert body["dominant_level"] == "low"
    assert sum(day["count"] for day in body["daily"]) == 3


# ── Non-finite samples ───────────────────────────────────────────────────────


@pytest.mark.parametrize("path", ["/signal/quality", "/signal/hrv", "/signal/trend"])
def test_signal_endpoints_reject_nan(client: TestClient, path: str) -> None:
    # Python's json module parses the bare NaN token; httpx refuses to encode it
    body = '{"samples": [70, 70, 70, 70, 70, 70, 70, 70, 70, NaN]}'
    response = client.post(path, content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 422


def test_invalid_samples_maps_to_422() -> None:
    app = create_app()

    @app.get("/boom")
    async def boom():
        raise InvalidSamples(1)

    with TestClient(app) as c:
        response = c.get("/boom")
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidSamples"
