from __future__ import annotations

import sys

from fastapi.testclient import TestClient

PLAN_TEXT = (
    "### Week 1 - 18 miles\n"
    "- Tue: [WORKOUT_ID: tempo_THRESHOLD_0] Tempo Run 5 miles\n"
    "- Thu: Easy 4 miles\n"
    "### Week 2 - 20 miles\n"
    "- Tue: [WORKOUT_ID: interval_VO2_MAX_0] Intervals 6 miles\n"
    "- Thu: [WORKOUT_ID: tempo_THRESHOLD_7] Tempo 5 miles\n"
)

PROFILE = {
    "race_distance": "10K",
    "race_time": "55:00",
    "recent_race_time": "10K - 60:00",
    "quality_days": ["Tue", "Thu"],
}


def _purge_api_modules() -> None:
    for name in [
        "api.main",
        "api.routes",
        "api.ratelimit",
    ]:
        sys.modules.pop(name, None)


def _build_client(monkeypatch, env_overrides: dict[str, str] | None = None) -> TestClient:
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173")
    if env_overrides:
        for key, value in env_overrides.items():
            monkeypatch.setenv(key, value)

    from plancore.config import get_settings

    get_settings.cache_clear()
    _purge_api_modules()

    from api.main import create_app

    return TestClient(create_app())


def test_health_echoes_or_generates_request_id_header(monkeypatch):
    with _build_client(monkeypatch) as client:
        custom_request_id = "req-test-123"
        resp = client.get("/health", headers={"X-Request-ID": custom_request_id})
        assert resp.status_code == 200, resp.text
        assert resp.json() == {"status": "ok"}
        assert resp.headers["X-Request-ID"] == custom_request_id

        generated = client.get("/health")
        assert generated.status_code == 200, generated.text
        assert generated.headers.get("X-Request-ID")


def test_compile_plan_endpoint(monkeypatch):
    with _build_client(monkeypatch) as client:
        resp = client.post("/api/v1/plans/compile", json={"plan_text": PLAN_TEXT, "profile": PROFILE})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert [w["week_number"] for w in body["weeks"]] == [1, 2]
        assert body["progressive"] is True
        assert body["paces"]["threshold"] == "9:09"
        assert body["track_intervals"]["interval"]["400m"] == "2:01"

        week1 = body["weeks"][0]["workouts"]
        assert week1[0]["enriched"] is True
        assert week1[0]["target_pace"] == "9:48/mi"
        assert week1[1]["repaired"] is True
        assert week1[1]["type"] == "tempo"

        codes = [d["code"] for d in body["diagnostics"]]
        assert "reference_unresolved" in codes
        assert "quality_day_repaired" in codes


def test_compile_plan_starting_week(monkeypatch):
    with _build_client(monkeypatch) as client:
        resp = client.post(
            "/api/v1/plans/compile",
            json={"plan_text": PLAN_TEXT, "profile": PROFILE, "starting_week": 2},
        )
        assert resp.status_code == 200, resp.text
        assert [w["week_number"] for w in resp.json()["weeks"]] == [2]


def test_compile_plan_out_of_range_goal_returns_422(monkeypatch):
    with _build_client(monkeypatch) as client:
        profile = {**PROFILE, "race_time": "25:00"}
        resp = client.post("/api/v1/plans/compile", json={"plan_text": PLAN_TEXT, "profile": profile})
        assert resp.status_code == 422, resp.text
        detail = resp.json()["detail"]
        assert detail["code"] == "GOAL_TIME_OUT_OF_RANGE"
        assert "32:00" in detail["message"]


def test_compile_plan_rejects_invalid_profile(monkeypatch):
    with _build_client(monkeypatch) as client:
        resp = client.post(
            "/api/v1/plans/compile",
            json={"plan_text": PLAN_TEXT, "profile": {"units": "furlongs"}},
        )
        assert resp.status_code == 422
        resp = client.post("/api/v1/plans/compile", json={"plan_text": "", "profile": PROFILE})
        assert resp.status_code == 422


def test_goal_paces_endpoint(monkeypatch):
    with _build_client(monkeypatch) as client:
        resp = client.post("/api/v1/paces", json={"distance": "10k", "goal_time": "52:30"})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["threshold"] == "8:49"
        assert body["interpolated"] is True
        assert body["interpolated_between"] == ["50:00", "55:00"]

        metric = client.post("/api/v1/paces", json={"distance": "10K", "goal_time": "55:00", "units": "metric"})
        assert metric.json()["unit"] == "km"
        assert metric.json()["threshold"] == "5:41"


def test_goal_paces_domain_errors(monkeypatch):
    with _build_client(monkeypatch) as client:
        unsupported = client.post("/api/v1/paces", json={"distance": "100K", "goal_time": "10:00:00"})
        assert unsupported.status_code == 422
        assert unsupported.json()["detail"]["code"] == "UNSUPPORTED_DISTANCE"

        bad_time = client.post("/api/v1/paces", json={"distance": "10K", "goal_time": "fast"})
        assert bad_time.status_code == 422
        assert bad_time.json()["detail"]["code"] == "INVALID_TIME_FORMAT"

        out_of_range = client.post("/api/v1/paces", json={"distance": "Marathon", "goal_time": "1:30:00"})
        assert out_of_range.status_code == 422
        assert out_of_range.json()["detail"]["code"] == "GOAL_TIME_OUT_OF_RANGE"


def test_blend_endpoint(monkeypatch):
    with _build_client(monkeypatch) as client:
        payload = {"distance": "10K", "current_time": "60:00", "goal_time": "55:00", "total_weeks": 12}
        first = client.post("/api/v1/paces/blend", json={**payload, "week_number": 1})
        last = client.post("/api/v1/paces/blend", json={**payload, "week_number": 12})
        assert first.status_code == 200, first.text
        assert first.json()["threshold"] == "9:48"
        assert first.json()["progress"] == 0.0
        assert last.json()["threshold"] == "9:09"
        assert last.json()["progress"] == 1.0

        invalid = client.post("/api/v1/paces/blend", json={**payload, "week_number": 13})
        assert invalid.status_code == 422


def test_goal_times_endpoint(monkeypatch):
    with _build_client(monkeypatch) as client:
        resp = client.get("/api/v1/paces/half marathon/goal-times")
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["distance"] == "Half"
        assert body["min_time"] == "1:00:00"
        assert body["max_time"] == "3:00:00"
        assert body["goal_times"][0] == body["min_time"]

        assert client.get("/api/v1/paces/ultra/goal-times").status_code == 422


def test_catalog_endpoint(monkeypatch):
    with _build_client(monkeypatch) as client:
        resp = client.get("/api/v1/catalog/interval/vo2_max")
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["kind"] == "interval"
        assert body["category"] == "VO2_MAX"
        assert [t["index"] for t in body["templates"]] == [0, 1, 2]
        assert body["templates"][0]["repetitions"] == "4-8 x 800m"

        empty = client.get("/api/v1/catalog/tempo/NOPE")
        assert empty.status_code == 200
        assert empty.json()["templates"] == []

        missing = client.get("/api/v1/catalog/swim/THRESHOLD")
        assert missing.status_code == 404
        assert missing.json()["detail"]["code"] == "TEMPLATE_NOT_FOUND"


def test_compile_rate_limit_returns_429_when_enabled(monkeypatch):
    env = {
        "APP_ENV": "dev",
        "RATE_LIMIT_ENABLED": "true",
        "COMPILE_RATE_LIMIT": "2/minute",
    }
    with _build_client(monkeypatch, env_overrides=env) as client:
        for _ in range(2):
            resp = client.post("/api/v1/plans/compile", json={"plan_text": PLAN_TEXT, "profile": PROFILE})
            assert resp.status_code == 200, resp.text
        limited = client.post("/api/v1/plans/compile", json={"plan_text": PLAN_TEXT, "profile": PROFILE})
        assert limited.status_code == 429, limited.text
        assert limited.json()["detail"]["code"] == "RATE_LIMITED"
