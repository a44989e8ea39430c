from unittest.mock import AsyncMock, MagicMock

import pytest

from petcare.main import app


@pytest.fixture
def db_manager(monkeypatch):
    """Attach a database manager whose ping result tests can control."""
    manager = MagicMock()
    manager.ping = AsyncMock(return_value=True)
    monkeypatch.setattr(app.state, "db_manager", manager, raising=False)
    return manager


def test_root_without_database(test_client):
    response = test_client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Pet Adoption Service is running!"
    assert body["mongodb"] == "disconnected"
    assert body["timestamp"].endswith("Z")


def test_root_reports_connected_database(test_client, db_manager):
    response = test_client.get("/")

    assert response.json()["mongodb"] == "connected"


def test_routes_are_registered():
    paths = {route.path for route in app.routes}

    assert "/api/adoption/applications" in paths
    assert "/api/adoption/applications/my-applications" in paths
    assert "/api/adoption/applications/{application_id}" in paths
    assert "/api/adoption/applications/{application_id}/status" in paths
    assert "/api/adoption/available-pets" in paths
    assert "/health" in paths


def test_unknown_route(test_client):
    response = test_client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Route not found",
        "path": "/api/does-not-exist",
        "method": "GET",
    }


def test_correlation_id_is_echoed(test_client):
    response = test_client.get("/health/live", headers={"X-Correlation-ID": "abc-123"})

    assert response.status_code == 200
    assert response.json()["status"] == "alive"
    assert response.headers["X-Correlation-ID"] == "abc-123"
    assert response.headers["X-Request-ID"] == "abc-123"


def test_correlation_id_is_generated(test_client):
    response = test_client.get("/health/live")

    assert response.headers["X-Correlation-ID"]


def test_health_healthy(test_client, db_manager):
    response = test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["dependencies"][0]["name"] == "mongodb"


def test_health_unhealthy(test_client, db_manager):
    db_manager.ping.return_value = False

    response = test_client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_readiness_without_database(test_client):
    response = test_client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["checks"] == {"mongodb": "not_ready"}


def test_error_response_carries_correlation_id(test_client):
    response = test_client.get(
        "/api/adoption/applications/my-applications",
        headers={"X-Correlation-ID": "trace-42"},
    )

    assert response.status_code == 400
    assert response.json()["correlation_id"] == "trace-42"
