import importlib

import httpx
from fastapi.testclient import TestClient

from api.main import create_app
from planner_ai.models import ApiConfig


def _import_app():
    # Import lazily so environment variables (if any) can be set before import.
    mod = importlib.import_module("api.main")
    return mod


def test_metrics_endpoint_exposes_prometheus_text() -> None:
    mod = _import_app()
    client = TestClient(mod.app)

    r = client.get("/metrics")
    assert r.status_code == 200
    # Prometheus text exposition format content-type
    assert "text/plain" in r.headers.get("content-type", "")
    body = r.text
    assert "planner_requests_total" in body
    assert "planner_request_latency_seconds" in body
    assert "planner_tasks_scheduled_total" in body


def test_schedule_increments_request_counter() -> None:
    def no_network(request):
        raise AssertionError("mock mode must not call upstream")

    app = create_app(ApiConfig(use_mock_responses=True), transport=httpx.MockTransport(no_network))
    client = TestClient(app)

    r = client.post("/api/generate-schedule", json={"tasks": [{"description": "Buy milk"}]})
    assert r.status_code == 200

    m = client.get("/metrics")
    assert m.status_code == 200

    # We avoid parsing because Prometheus text parsers can be fragile across environments.
    lines = m.text.splitlines()
    found = any(
        line.startswith('planner_requests_total{endpoint="/api/generate-schedule",status="ok"}')
        for line in lines
    )
    assert found, "Expected planner_requests_total sample line for /api/generate-schedule"


def test_failed_requests_are_counted_by_kind() -> None:
    app = create_app(ApiConfig(use_mock_responses=True))
    client = TestClient(app)

    r = client.post("/api/generate-schedule", json={"tasks": []})
    assert r.status_code == 400

    body = client.get("/metrics").text
    assert 'planner_errors_total{kind="invalid_request"}' in body
    assert 'planner_requests_total{endpoint="/api/generate-schedule",status="error"}' in body
