import random
from typing import Dict, Iterator

import pytest
from fastapi.testclient import TestClient

from app import api as api_module
from app.main import create_app
from datastore.measurement_cache import MeasurementCache, build_default_cache
from services.dashboard import DashboardService, build_default_dashboard
from settings import get_settings


@pytest.fixture
def api_client(monkeypatch) -> Iterator[TestClient]:
    dashboards: Dict[str, DashboardService] = {}

    def build_test_dashboard(update_interval_seconds: float | None = None) -> DashboardService:
        dashboard = dashboards.get("default")
        if dashboard is None:
            cache = MeasurementCache(latency_seconds=0, rng=random.Random(21))
            dashboard = DashboardService(
                cache=cache,
                update_interval_seconds=update_interval_seconds or 60.0,
            )
            dashboards["default"] = dashboard
        return dashboard

    def cache_clear() -> None:
        dashboards.clear()

    build_test_dashboard.cache_clear = cache_clear  # type: ignore[attr-defined]

    monkeypatch.setattr("app.main.build_default_dashboard", build_test_dashboard)
    monkeypatch.setattr("app.api.build_default_dashboard", build_test_dashboard)
    monkeypatch.setattr("app.web.build_default_dashboard", build_test_dashboard)

    app = create_app()
    with TestClient(app) as client:
        yield client

    cache_clear()


def test_lifespan_initializes_and_clears_dashboard(monkeypatch) -> None:
    monkeypatch.setenv("DASHBOARD_FETCH_LATENCY_SECONDS", "0")
    get_settings.cache_clear()
    build_default_cache.cache_clear()
    build_default_dashboard.cache_clear()
    app = create_app()

    try:
        with TestClient(app):
            during = build_default_dashboard()
            assert set(during.state.last_values) == {"SEN-001", "SEN-002", "SEN-003"}

        after = build_default_dashboard()
        assert after is not during
        assert after.state.last_values == {}
        assert after.cache is not during.cache
    finally:
        build_default_dashboard.cache_clear()
        build_default_cache.cache_clear()
        get_settings.cache_clear()


def test_list_sensors_reports_status(api_client: TestClient) -> None:
    response = api_client.get("/sensors")

    assert response.status_code == 200
    sensors = response.json()
    assert [sensor["id"] for sensor in sensors] == ["SEN-001", "SEN-002", "SEN-003"]
    for sensor in sensors:
        expected = "ALARM" if sensor["last_value"] > sensor["threshold"] else "OK"
        assert sensor["status"] == expected


def test_measurements_endpoint_returns_series(api_client: TestClient) -> None:
    response = api_client.get("/sensors/SEN-002/measurements")

    assert response.status_code == 200
    payload = response.json()
    assert payload["sensor_id"] == "SEN-002"
    assert len(payload["measurements"]) == 100
    assert all(1.4 <= item["disp_mm"] <= 3.8 for item in payload["measurements"])
    assert payload["measurements"][0]["timestamp"].endswith("Z")


def test_measurements_for_unknown_sensor_return_not_found(api_client: TestClient) -> None:
    dashboard = api_module.build_default_dashboard()

    responses = [api_client.get(f"/sensors/bogus-{index}/measurements") for index in range(5)]

    assert {response.status_code for response in responses} == {404}
    assert "bogus-0" in responses[0].json()["detail"]
    assert dashboard.cache.sensor_ids() == ["SEN-001", "SEN-002", "SEN-003"]
    assert "bogus-0" not in dashboard.cache


def test_trigger_appends_one_point_per_sensor(api_client: TestClient) -> None:
    before = api_client.get("/sensors/SEN-001/measurements").json()["measurements"]

    response = api_client.post("/live/trigger")

    assert response.status_code == 200
    snapshot = response.json()
    assert snapshot["is_live_updating"] is False
    assert set(snapshot["latest_measurements"]) == {"SEN-001", "SEN-002", "SEN-003"}

    after = api_client.get("/sensors/SEN-001/measurements").json()["measurements"]
    assert len(after) == 100
    assert after[-1] == snapshot["latest_measurements"]["SEN-001"]
    assert after[0] == before[1]
    assert snapshot["last_values"]["SEN-001"] == after[-1]["disp_mm"]


def test_start_and_stop_live_updates(api_client: TestClient) -> None:
    started = api_client.post("/live/start")
    started_again = api_client.post("/live/start")

    assert started.status_code == 200
    assert started.json()["is_live_updating"] is True
    assert started_again.json()["is_live_updating"] is True

    stopped = api_client.post("/live/stop")
    stopped_again = api_client.post("/live/stop")

    assert stopped.json()["is_live_updating"] is False
    assert stopped_again.status_code == 200
    assert api_client.get("/dashboard").json()["is_live_updating"] is False


def test_chart_endpoint_returns_plotly_figure(api_client: TestClient) -> None:
    response = api_client.get("/sensors/SEN-003/chart")

    assert response.status_code == 200
    payload = response.json()
    assert payload["sensor_id"] == "SEN-003"
    assert [trace["name"] for trace in payload["figure"]["data"]] == ["Displacement", "Threshold"]
    assert payload["config"]["displayModeBar"] is False


def test_chart_for_unknown_sensor_returns_not_found(api_client: TestClient) -> None:
    response = api_client.get("/sensors/SEN-404/chart")

    assert response.status_code == 404
    assert "SEN-404" in response.json()["detail"]


def test_ui_pages_render(api_client: TestClient) -> None:
    index = api_client.get("/ui")
    detail = api_client.get("/ui/sensors/SEN-001")
    missing = api_client.get("/ui/sensors/SEN-404")

    assert index.status_code == 200
    assert "Bridge Pier North" in index.text
    assert "Tunnel Portal South" in index.text
    assert detail.status_code == 200
    assert "River crossing A1" in detail.text
    assert missing.status_code == 404


def test_health_endpoints(api_client: TestClient) -> None:
    assert api_client.get("/health").json() == {"status": "ok"}
    assert api_client.get("/").json()["status"] == "ok"
