# File: backend/tests/test_profile_api.py
# Version: v0.1.0
"""
Tests for the profile API (FastAPI TestClient, in-memory).
"""

from fastapi.testclient import TestClient

from backend.app.main import app

client = TestClient(app)


def test_parameters_defaults():
    r = client.get("/api/profile/parameters")
    assert r.status_code == 200
    data = r.json()
    assert data["threshold"] == 3.0
    assert data["window_size"] == 15
    assert data["stride"] == 5
    assert data["salt_model"] == "effective"


def test_analyze_basic_ok():
    r = client.post("/api/profile/analyze", json={"sequence": "ACGTACGTACGTACGTACGT"})
    assert r.status_code == 200
    data = r.json()
    assert len(data["windows"]) == 2
    w0 = data["windows"][0]
    assert (w0["start"], w0["end"]) == (0, 15)
    assert set(w0["features"]) == {
        "gc", "hb_per_base", "stack_per_base", "dG_per_base", "zx", "zy", "zz", "bendability",
    }
    assert len(w0["contributions"]) == 8
    assert w0["anomalyType"] == "None"
    assert data["thresholdUsed"] == 3.0
    assert data["correlationMap"] == []
    assert len(data["multivariateScores"]) == 2
    assert set(data["stats"]) == {"mean", "std"}
    assert sum(data["summary"]["archetypeCounts"].values()) == 2


def test_analyze_with_parameters():
    payload = {
        "sequence": "ACGT" * 20,
        "parameters": {"window_size": 10, "stride": 10, "threshold": 2.5, "salt_model": "monovalent"},
    }
    r = client.post("/api/profile/analyze", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert len(data["windows"]) == 8
    assert data["thresholdUsed"] == 2.5
    assert data["parameters"]["salt_model"] == "monovalent"


def test_analyze_short_sequence_400():
    r = client.post("/api/profile/analyze", json={"sequence": "A" * 14})
    assert r.status_code == 400
    assert r.json()["detail"] == "Sequence length (14) must be at least window size (15)."


def test_analyze_empty_sequence_400():
    r = client.post("/api/profile/analyze", json={"sequence": ""})
    assert r.status_code == 400
    assert r.json()["detail"] == "Sequence length (0) must be at least window size (15)."


def test_analyze_keeps_surrounding_whitespace():
    r = client.post("/api/profile/analyze", json={"sequence": "  ACGTACGTACGTACGTACGT "})
    assert r.status_code == 200
    data = r.json()
    # 23 chars: blanks are read as N, so coordinates follow the raw input
    assert [(w["start"], w["end"]) for w in data["windows"]] == [(0, 15), (5, 20)]
    assert data["windows"][0]["sequence"].startswith("NNACGT")


def test_analyze_validation_422():
    r = client.post(
        "/api/profile/analyze",
        json={"sequence": "ACGT" * 10, "parameters": {"stride": 0}},
    )
    assert r.status_code == 422
    r2 = client.post(
        "/api/profile/analyze",
        json={"sequence": "ACGT" * 10, "parameters": {"salt_model": "unknown"}},
    )
    assert r2.status_code == 422


def test_compare_ok():
    payload = {"sequenceA": "ACGT" * 10, "sequenceB": "GGCC" * 8}
    r = client.post("/api/profile/compare", json=payload)
    assert r.status_code == 200
    data = r.json()
    # A: 40 bp → 6 windows; B: 32 bp → 4 windows
    assert len(data["deltas"]) == 4
    assert data["deltas"][0]["diff"]["gc"] > 0
    assert data["avgDelta"]["gc"] > 0


def test_compare_short_400():
    r = client.post("/api/profile/compare", json={"sequenceA": "ACGT" * 10, "sequenceB": "ACG"})
    assert r.status_code == 400
    assert "(3)" in r.json()["detail"]


def test_report_html():
    r = client.post(
        "/api/profile/report",
        json={"sequence": "ACGTACGTACGTACGTACGT", "windowIndex": 1, "recordId": "demo"},
    )
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "<!DOCTYPE html>" in r.text
    assert "GEN-1-" in r.text
    assert "CGTACGTACGTACGT" in r.text


def test_report_missing_window_404():
    r = client.post(
        "/api/profile/report",
        json={"sequence": "ACGTACGTACGTACGTACGT", "windowIndex": 9},
    )
    assert r.status_code == 404
