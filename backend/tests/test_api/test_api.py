"""Tests for API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from flakecut.main import app


client = TestClient(app)


@pytest.fixture
def session_id() -> str:
    response = client.post("/api/sessions")
    assert response.status_code == 201
    return response.json()["session_id"]


def _draw(session_id: str, *points) -> dict:
    x, y = points[0]
    response = client.post(f"/api/sessions/{session_id}/strokes", json={"x": x, "y": y})
    stroke_id = response.json()["stroke"]["stroke_id"]
    for x, y in points[1:]:
        client.post(f"/api/sessions/{session_id}/strokes/{stroke_id}/points", json={"x": x, "y": y})
    return client.post(f"/api/sessions/{session_id}/strokes/{stroke_id}/finish").json()


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"


def test_create_session(session_id):
    data = client.get(f"/api/sessions/{session_id}").json()
    assert data["mode"] == "freehand"
    assert data["stroke_count"] == 0
    assert data["live_stroke_id"] is None


def test_unknown_session():
    assert client.get("/api/sessions/nope").status_code == 404
    assert client.post("/api/sessions/nope/strokes", json={"x": 520, "y": 200}).status_code == 404


def test_stroke_lifecycle(session_id):
    begin = client.post(f"/api/sessions/{session_id}/strokes", json={"x": 520, "y": 200}).json()
    assert begin["accepted"]
    assert begin["snapped"] is False
    stroke_id = begin["stroke"]["stroke_id"]

    extend = client.post(
        f"/api/sessions/{session_id}/strokes/{stroke_id}/points", json={"x": 540, "y": 300}
    ).json()
    assert extend["d"] == "M 520.00 200.00 L 540.00 300.00"
    assert extend["replica_count"] == 12

    finished = client.post(f"/api/sessions/{session_id}/strokes/{stroke_id}/finish").json()
    assert finished["finalized"]
    assert finished["points"] == [{"x": 520, "y": 200}, {"x": 540, "y": 300}]

    data = client.get(f"/api/sessions/{session_id}").json()
    assert data["stroke_count"] == 1
    assert data["replica_count"] == 12


def test_begin_outside_wedge(session_id):
    data = client.post(f"/api/sessions/{session_id}/strokes", json={"x": 300, "y": 300}).json()
    assert data["accepted"] is False
    assert data["stroke"] is None


def test_second_live_stroke_conflicts(session_id):
    client.post(f"/api/sessions/{session_id}/strokes", json={"x": 520, "y": 200})
    response = client.post(f"/api/sessions/{session_id}/strokes", json={"x": 540, "y": 300})
    assert response.status_code == 409


def test_stale_stroke_conflicts(session_id):
    response = client.post(f"/api/sessions/{session_id}/strokes/S9/finish")
    assert response.status_code == 409


def test_set_mode(session_id):
    response = client.put(f"/api/sessions/{session_id}/mode", json={"mode": "line", "stroke_width": 3})
    assert response.status_code == 200
    assert response.json()["mode"] == "line"
    assert response.json()["stroke_width"] == 3

    stroke = _draw(session_id, (520, 300), (700, 300))
    assert stroke["mode"] == "line"
    assert stroke["points"][-1]["x"] == pytest.approx(615.47, abs=0.01)


def test_invalid_mode(session_id):
    response = client.put(f"/api/sessions/{session_id}/mode", json={"mode": "spray"})
    assert response.status_code == 422


def test_paths_and_endpoints(session_id):
    _draw(session_id, (520, 200), (540, 300))
    paths = client.get(f"/api/sessions/{session_id}/paths").json()["paths"]
    assert len(paths) == 12
    assert paths[0]["rotation"] == 0
    assert paths[0]["mirrored"] is False
    assert paths[1]["d"] == "M 480.00 200.00 L 460.00 300.00"

    endpoints = client.get(f"/api/sessions/{session_id}/endpoints").json()["endpoints"]
    assert len(endpoints) == 24


def test_export_empty(session_id):
    data = client.get(f"/api/sessions/{session_id}/export").json()
    assert data["svg"] is None
    assert data["notice"]


def test_export(session_id):
    _draw(session_id, (520, 200), (540, 300))
    data = client.get(f"/api/sessions/{session_id}/export").json()
    assert data["path_count"] == 12
    assert 'width="100mm"' in data["svg"]
    assert "transform" not in data["svg"]

    response = client.get(f"/api/sessions/{session_id}/export.svg", params={"size_mm": 200})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert 'stroke-width="0.5"' in response.text


def test_undo_and_clear(session_id):
    _draw(session_id, (520, 200), (540, 300))
    _draw(session_id, (600, 200), (620, 250))

    data = client.post(f"/api/sessions/{session_id}/undo").json()
    assert data["removed"]["stroke_id"] == "S2"
    assert data["stroke_count"] == 1

    data = client.post(f"/api/sessions/{session_id}/clear").json()
    assert data["stroke_count"] == 0
    assert data["replica_count"] == 0

    data = client.post(f"/api/sessions/{session_id}/undo").json()
    assert data["removed"] is None


def test_fill(session_id):
    _draw(session_id, (520, 200), (540, 300))
    data = client.get(f"/api/sessions/{session_id}/fill", params={"resolution": 50}).json()
    assert data["resolution"] == 50
    assert data["region_count"] == 0

    response = client.get(f"/api/sessions/{session_id}/fill.png", params={"resolution": 50})
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")


def test_delete_session(session_id):
    assert client.delete(f"/api/sessions/{session_id}").status_code == 204
    assert client.get(f"/api/sessions/{session_id}").status_code == 404


def test_fill_text(session_id):
    _draw(session_id, (520, 200), (540, 300))
    response = client.get(f"/api/sessions/{session_id}/fill.txt", params={"resolution": 20})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    lines = response.text.splitlines()
    assert len(lines) == 20
    assert set("".join(lines)) <= {"#", "."}
