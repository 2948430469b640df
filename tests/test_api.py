"""Tests for the Todate FastAPI application.

Each test builds a fresh app via `create_app()` and drives it with
`fastapi.testclient.TestClient`; the API is stateless so no fixtures are shared.
"""

from __future__ import annotations

from typing import Any, Final
from unittest.mock import patch

from fastapi.testclient import TestClient

from todate import __version__ as PKG_VERSION
from todate.api.app import create_app
from todate.core.calendar import resolve as resolve_module
from todate.core.settings import load_settings

ALLOWED_ENVS: Final[set[str]] = {"dev", "test", "prod"}


def _client() -> TestClient:
    return TestClient(create_app())


def test_health_endpoint_contract() -> None:
    """`GET /health` returns a stable shape and expected values."""
    resp = _client().get("/health")
    assert resp.status_code == 200

    data = resp.json()
    assert data["status"] == "ok"
    assert data["environment"] in ALLOWED_ENVS
    assert data["version"] == PKG_VERSION


def test_resolve_school_date() -> None:
    """Year 1, Q4 with a September start resolves into June 2001."""
    resp = _client().post(
        "/resolve",
        json={
            "value": {"kind": "school", "schoolYear": 1, "period": 4},
            "school": {"referenceYear": 2000, "month": 9, "day": 1},
        },
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["iso"] == "2001-06-01T12:00:00+00:00"
    assert data["label"] == "Jun 2001–Aug 2001"
    assert 2001.4 < data["fractional_year"] < 2001.5


def test_resolve_accepts_legacy_quarter() -> None:
    """Legacy payloads resolve like their upgraded shape."""
    resp = _client().post(
        "/resolve", json={"value": {"kind": "school", "schoolYear": 1, "quarter": 4}}
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["iso"] == "2001-06-01T12:00:00+00:00"
    assert resp.json()["label"] == "Year 1, Q4"


def test_resolve_rejects_unknown_kind() -> None:
    """Request validation failures are 422s."""
    resp = _client().post("/resolve", json={"value": {"kind": "decade", "year": 1990}})
    assert resp.status_code == 422


def test_lanes() -> None:
    """Overlapping ranges are spread over lanes; points are ignored."""
    resp = _client().post(
        "/lanes",
        json={
            "items": [
                {"id": "A", "start": 2000, "end": 2005},
                {"id": "B", "start": 2002, "end": 2003},
                {"id": "C", "start": 2004, "end": 2006},
                {"id": "P", "start": 2001},
            ]
        },
    )
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"lanes": {"A": 0, "B": 1, "C": 1}, "lane_count": 2}


def test_ticks() -> None:
    resp = _client().post(
        "/ticks", json={"start_year": 1900, "end_year": 2000, "pixel_height": 400}
    )
    assert resp.status_code == 200, resp.text
    ticks = resp.json()["ticks"]
    assert ticks[:2] == [1900, 1905]
    assert ticks[-1] == 2000


def test_ticks_rejects_non_positive_height() -> None:
    resp = _client().post("/ticks", json={"start_year": 1900, "end_year": 2000, "pixel_height": 0})
    assert resp.status_code == 422


def test_span_gestures_round_trip_state() -> None:
    """A client seeds a span, then feeds the returned state back in."""
    client = _client()
    seeded = client.post(
        "/span",
        json={"span": {"start_year": 2000, "end_year": 2010}, "gesture": "pan", "amount": 0.25},
    )
    assert seeded.status_code == 200, seeded.text
    state = seeded.json()
    assert state["start"] == 2000.25
    assert state["published"] == {"start_year": 2000, "end_year": 2010}

    panned = client.post("/span", json={"state": state, "gesture": "pan", "amount": 0.25})
    assert panned.status_code == 200, panned.text
    assert panned.json()["published"] == {"start_year": 2001, "end_year": 2011}

    pinched = client.post(
        "/span",
        json={"span": {"start_year": 2000, "end_year": 2010}, "gesture": "pinch", "amount": 2},
    )
    assert pinched.json()["published"] == {"start_year": 2003, "end_year": 2008}


def test_span_requires_state_or_span() -> None:
    """Missing both starting points is a 400 from the ValueError handler."""
    resp = _client().post("/span", json={"gesture": "pan", "amount": 1})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Bad Request"


def test_docs_hidden_in_production(monkeypatch: Any) -> None:
    """`/docs` is served in dev/test and not mounted at all under TODATE_ENV=prod."""
    assert _client().get("/docs").status_code == 200

    monkeypatch.setenv("TODATE_ENV", "prod")
    load_settings.cache_clear()
    client = _client()
    assert client.get("/docs").status_code == 404
    assert client.get("/redoc").status_code == 404
    assert client.get("/health").json()["environment"] == "prod"


def test_resolve_warns_once_about_overlapping_school_years() -> None:
    """A request whose school config double-lists a year logs one warning."""
    with patch.object(resolve_module.logger, "warning") as warning:
        resp = _client().post(
            "/resolve",
            json={
                "value": {"kind": "school", "schoolYear": 5, "period": 1},
                "school": {
                    "referenceYear": 2000,
                    "repeatedGrades": [3],
                    "skippedGrades": [3],
                },
            },
        )
    assert resp.status_code == 200, resp.text
    assert warning.call_count == 1
