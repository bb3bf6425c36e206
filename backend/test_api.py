"""
test_api.py: health, context build and suggestions over HTTP.
"""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from api.routes import context as context_routes
from api.server import app
from main import SAMPLE_TRIP, SAMPLE_WEATHER
from modules.observability.logger import StructuredLogger


@pytest.fixture
def audit(tmp_path, monkeypatch):
    logger = StructuredLogger(tmp_path)
    monkeypatch.setattr(context_routes, "_audit", logger)
    yield logger
    logger.close()


@pytest.fixture
def client(audit):
    return TestClient(app)


def test_health(client):
    resp = client.get("/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "service": "trip-context-engine"}


def test_build_sample_trip(client, audit):
    resp = client.post("/v1/context/build", json={"trip": SAMPLE_TRIP, "weather": SAMPLE_WEATHER})
    assert resp.status_code == 200
    body = resp.json()
    assert body["warnings"] == []
    ctx = body["context"]
    assert ctx["tripId"] == "trip_sample_lisbon"
    assert [i["type"] for i in ctx["issues"]] == [
        "time_conflict", "time_conflict", "meal_gap", "no_accommodation",
    ]

    audit.close()
    lines = (audit.logs_dir / "trip_sample_lisbon.jsonl").read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])
    assert record["event_type"] == "context_built"
    assert record["payload"] == {"days": 2, "issues": 4, "warnings": 0}


def test_malformed_trip_content_still_builds(client):
    resp = client.post("/v1/context/build", json={"trip": {"itinerary": "nope", "startDate": "soon"}})
    assert resp.status_code == 200
    body = resp.json()
    assert body["context"]["destination"] == "Unknown"
    assert {w["field"] for w in body["warnings"]} >= {"itinerary", "startDate", "endDate"}


def test_wrong_envelope_is_rejected(client):
    assert client.post("/v1/context/build", json={"trip": [1, 2, 3]}).status_code == 422
    assert client.post("/v1/context/build", json={}).status_code == 422


def test_suggestions_endpoint(client):
    resp = client.post("/v1/context/suggestions", json={"trip": SAMPLE_TRIP, "weather": SAMPLE_WEATHER})
    assert resp.status_code == 200
    body = resp.json()
    assert body["suggestions"][0]["id"] == "accommodation-missing"
    assert body["suggestions"][0]["category"] == "booking"
    assert len(body["quickPrompts"]) == 4


def test_stream_names_are_sanitised(tmp_path):
    logger = StructuredLogger(tmp_path)
    logger.log("../../etc/passwd", "context_built", {})
    logger.log("", "context_built", {})
    logger.close()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["______etc_passwd.jsonl", "anonymous.jsonl"]


def test_audit_streams_are_closed_after_each_build(client, audit):
    for i in range(40):
        doc = dict(SAMPLE_TRIP, id=f"trip_{i}")
        assert client.post("/v1/context/build", json={"trip": doc}).status_code == 200
    assert audit.open_streams == []
    assert len(list(audit.logs_dir.glob("trip_*.jsonl"))) == 40
