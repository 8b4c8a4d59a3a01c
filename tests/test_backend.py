"""Tests for the HTTP wrapper."""

import pytest
from fastapi.testclient import TestClient

from backend.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_tables(client):
    body = client.get("/api/tables").json()
    assert len(body["soil"]) == 9
    assert len(body["conductor"]) == 8
    assert body["soil"][5]["key"] == "crushed_stone"


def test_evaluate_defaults(client):
    r = client.post("/api/evaluate", json={"sweeps": {"resistance_curve": {"enabled": False}}})
    assert r.status_code == 200
    body = r.json()
    assert body["results"]["grid_side_m"] == 208.0
    assert body["results"]["gpr_v"] == pytest.approx(3665.74770441, rel=1e-9)


def test_evaluate_invalid_input(client):
    r = client.post("/api/evaluate", json={"soil": {"type": "bedrock"}})
    assert r.status_code == 422
    assert "bedrock" in r.json()["detail"]


def test_evaluate_not_sizable(client):
    r = client.post(
        "/api/evaluate",
        json={"design": {"min_mesh_resistance_ohm": 0.5, "max_side_m": 300}},
    )
    assert r.status_code == 409
    assert r.json()["detail"]["target_ohm"] == 0.5


def test_evaluate_rejects_non_finite_temperature(client):
    r = client.post(
        "/api/evaluate",
        content='{"conductor": {"ambient_temp_c": NaN}}',
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 422
    assert "ambient_temp_c" in r.json()["detail"]


def test_evaluate_rejects_unbounded_search(client):
    r = client.post(
        "/api/evaluate",
        json={"design": {"min_mesh_resistance_ohm": 0.5, "max_side_m": 1.0e12}},
    )
    assert r.status_code == 422
    assert "max_side_m" in r.json()["detail"]
