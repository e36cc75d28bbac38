"""
Task Manager API - Startup Security Checks and Error Handling Tests
"""

import warnings

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskmanager.config import settings
from taskmanager.errors import register_exception_handlers
from taskmanager.security import DEFAULT_JWT_SECRET, validate_security_config


def _collect_warnings() -> list[str]:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        validate_security_config()
    return [str(w.message) for w in caught]


class TestValidateSecurityConfig:

    def test_default_secret_in_development_is_quiet(self, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "development")
        monkeypatch.setattr(settings, "JWT_SECRET_KEY", DEFAULT_JWT_SECRET)
        monkeypatch.setattr(settings, "CORS_ORIGINS", ["http://localhost:5173"])
        assert _collect_warnings() == []

    def test_default_secret_in_production_warns(self, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")
        monkeypatch.setattr(settings, "JWT_SECRET_KEY", DEFAULT_JWT_SECRET)
        monkeypatch.setattr(settings, "CORS_ORIGINS", ["https://tasks.example.com"])
        messages = _collect_warnings()
        assert any("default JWT_SECRET_KEY" in m for m in messages)

    def test_short_secret_in_production_warns(self, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")
        monkeypatch.setattr(settings, "JWT_SECRET_KEY", "short")
        monkeypatch.setattr(settings, "CORS_ORIGINS", ["https://tasks.example.com"])
        messages = _collect_warnings()
        assert any("too short" in m for m in messages)

    def test_cors_wildcard_warns(self, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "development")
        monkeypatch.setattr(settings, "CORS_ORIGINS", ["*"])
        messages = _collect_warnings()
        assert any("wildcard" in m for m in messages)


class TestUnhandledExceptionHandler:

    @pytest.fixture
    def failing_client(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("database exploded")

        return TestClient(app, raise_server_exceptions=False)

    def test_returns_generic_json_500(self, failing_client, monkeypatch):
        monkeypatch.setattr(settings, "DEBUG", False)
        response = failing_client.get("/boom")
        assert response.status_code == 500
        assert response.json() == {"detail": "Server error"}

    def test_includes_error_in_debug(self, failing_client, monkeypatch):
        monkeypatch.setattr(settings, "DEBUG", True)
        response = failing_client.get("/boom")
        assert response.status_code == 500
        assert response.json()["error"] == "database exploded"
