"""
Tests for the clipping and playback endpoints.

These tests use FastAPI's TestClient to exercise the application
without running a real server.  They check that the clip endpoint
returns the same trace as the service layer and that the playback
endpoints walk through it one step at a time.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from polyclip.main import app  # type: ignore

SQUARE = [{"x": 0, "y": 0}, {"x": 4, "y": 0}, {"x": 4, "y": 4}, {"x": 0, "y": 4}]
DIAMOND = [{"x": 2, "y": -1}, {"x": 5, "y": 2}, {"x": 2, "y": 5}, {"x": -1, "y": 2}]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _clip(client: TestClient, subject, clip_polygon) -> dict:
    response = client.post("/api/clip", json={"subject": subject, "clip": clip_polygon})
    assert response.status_code == 200
    return response.json()


def test_health(client: TestClient) -> None:
    assert client.get("/api/health").json() == {"status": "ok"}


def test_clip_returns_result_and_trace(client: TestClient) -> None:
    data = _clip(client, SQUARE, DIAMOND)
    assert len(data["result"]) == 8
    assert data["totalSteps"] == 4
    assert len(data["steps"]) == 4
    assert data["steps"][0]["index"] == 0
    assert data["steps"][0]["clipEdge"] == {
        "start": {"x": 2.0, "y": -1.0},
        "end": {"x": 5.0, "y": 2.0},
    }
    assert data["steps"][-1]["outputPolygon"] == data["result"]
    kinds = {a["kind"] for step in data["steps"] for a in step["actions"]}
    assert kinds <= {"ADD_VERTEX", "ADD_INTERSECTION", "SKIP_VERTEX"}
    assert all(a["reason"] for step in data["steps"] for a in step["actions"])
    meta = data["metadata"]
    assert meta["clipWinding"] == "ccw"
    assert meta["clipConvex"] is True
    assert meta["earlyTermination"] is False
    assert meta["processedEdges"] == 4


def test_disjoint_polygons_report_early_termination(client: TestClient) -> None:
    clip_square = [{"x": 10, "y": 4}, {"x": 10, "y": 0}, {"x": 14, "y": 0}, {"x": 14, "y": 4}]
    triangle = [{"x": 0, "y": 0}, {"x": 4, "y": 0}, {"x": 2, "y": 3}]
    data = _clip(client, triangle, clip_square)
    assert data["result"] == []
    assert data["totalSteps"] == 1
    assert data["metadata"]["earlyTermination"] is True


def test_degenerate_input_is_not_an_error(client: TestClient) -> None:
    data = _clip(client, SQUARE[:2], DIAMOND)
    assert data["result"] == []
    assert data["totalSteps"] == 0
    assert data["steps"] == []


def test_malformed_body_is_rejected(client: TestClient) -> None:
    response = client.post("/api/clip", json={"subject": [{"x": "a"}], "clip": []})
    assert response.status_code == 422


def test_step_by_step_playback(client: TestClient) -> None:
    data = _clip(client, SQUARE, DIAMOND)
    ledger_id = data["ledgerId"]

    for expected in range(4):
        resp = client.post(f"/api/clips/{ledger_id}/next")
        assert resp.status_code == 200
        body = resp.json()
        assert body["cursor"] == expected
        assert body["finished"] is False
        assert body["step"] == data["steps"][expected]
        assert body["result"] is None

    done = client.post(f"/api/clips/{ledger_id}/next").json()
    assert done["finished"] is True
    assert done["cursor"] == 3
    assert done["result"] == data["result"]

    reset = client.post(f"/api/clips/{ledger_id}/reset").json()
    assert reset["cursor"] == -1
    assert reset["step"] is None
    again = client.post(f"/api/clips/{ledger_id}/next").json()
    assert again["step"] == data["steps"][0]


def test_get_step_by_index(client: TestClient) -> None:
    data = _clip(client, SQUARE, DIAMOND)
    ledger_id = data["ledgerId"]
    resp = client.get(f"/api/clips/{ledger_id}/steps/2")
    assert resp.status_code == 200
    assert resp.json() == data["steps"][2]
    assert client.get(f"/api/clips/{ledger_id}/steps/4").status_code == 404


def test_unknown_ledger_returns_404(client: TestClient) -> None:
    assert client.post("/api/clips/nope/next").status_code == 404
    assert client.post("/api/clips/nope/reset").status_code == 404
    assert client.get("/api/clips/nope/steps/0").status_code == 404


def test_finished_playback_matches_clip_result_after_early_exit(client: TestClient) -> None:
    big_square = [{"x": -10, "y": -10}, {"x": 10, "y": -10}, {"x": 10, "y": 10}, {"x": -10, "y": 10}]
    triangle = [{"x": 0, "y": 0}, {"x": 1, "y": 0}, {"x": 0, "y": 1}]
    data = _clip(client, big_square, triangle)
    assert data["result"] == []
    assert data["totalSteps"] == 1
    assert len(data["steps"][0]["outputPolygon"]) == 2

    ledger_id = data["ledgerId"]
    client.post(f"/api/clips/{ledger_id}/next")
    done = client.post(f"/api/clips/{ledger_id}/next").json()
    assert done["finished"] is True
    assert done["result"] == data["result"]


def test_pentagram_clip_window_is_reported_as_not_convex(client: TestClient) -> None:
    pentagram = [
        {"x": 0.0, "y": 1.0},
        {"x": -0.5878, "y": -0.809},
        {"x": 0.9511, "y": 0.309},
        {"x": -0.9511, "y": 0.309},
        {"x": 0.5878, "y": -0.809},
    ]
    triangle = [{"x": 0, "y": 0}, {"x": 0.1, "y": 0}, {"x": 0, "y": 0.1}]
    data = _clip(client, triangle, pentagram)
    assert data["metadata"]["clipConvex"] is False
