"""
Task Manager API - Health Endpoint Tests
"""

import pytest
from fastapi.testclient import TestClient

from taskmanager.main import app
from taskmanager.config import settings


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_returns_healthy_status(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"

    def test_health_includes_service_info(self, client):
        data = client.get("/health").json()
        assert data["service"] == settings.APP_NAME
        assert data["version"] == settings.APP_VERSION


class TestRootEndpoint:
    """Tests for the root endpoint."""

    def test_root_includes_service_info(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "service" in data
        assert "version" in data


class TestCors:
    """The configured frontend origin may call the API with the x-auth-token header."""

    def test_preflight_allows_configured_origin(self, client):
        origin = settings.CORS_ORIGINS[0]
        response = client.options(
            "/api/tasks",
            headers={
                "Origin": origin,
                "Access-Control-Request-Method": "PUT",
                "Access-Control-Request-Headers": "x-auth-token",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin
