"""
Task Manager API - Test Configuration

Shared fixtures for CI-safe testing without MongoDB.
"""

import asyncio
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from taskmanager.main import app
from taskmanager.auth.models import User
from taskmanager.auth.repository import InMemoryUserRepository
from taskmanager.auth.service import AuthService
from taskmanager.auth.dependencies import get_user_repository
from taskmanager.tasks.repository import InMemoryTaskRepository
from taskmanager.tasks.router import get_task_repository


# Global in-memory repositories for tests
_test_repository = InMemoryTaskRepository()
_test_user_repository = InMemoryUserRepository()


async def override_get_user_repository():
    """Override dependency to use in-memory user repository."""
    return _test_user_repository


async def override_get_task_repository():
    """Override dependency to use in-memory task repository."""
    return _test_repository


class UserRepositoryWrapper:
    """Test-only wrapper that provides sync access to async repository."""

    def clear(self) -> None:
        _test_user_repository.clear()

    def get_by_username(self, username: str) -> Optional[User]:
        return asyncio.run(_test_user_repository.get_by_username(username))


user_repository = UserRepositoryWrapper()
auth_service = AuthService(_test_user_repository)


@pytest.fixture
def task_repository():
    """Provide a fresh in-memory task repository for each test."""
    _test_repository.clear()
    return _test_repository


@pytest.fixture
def client(task_repository):
    """Create test client with in-memory repositories."""
    user_repository.clear()
    app.dependency_overrides[get_task_repository] = override_get_task_repository
    app.dependency_overrides[get_user_repository] = override_get_user_repository

    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def registered_user(client):
    """Register a test user and return credentials."""
    credentials = {
        "username": "testuser",
        "email": "testuser@example.com",
        "password": "testpassword123",
    }
    client.post("/api/auth/register", json=credentials)
    return credentials


@pytest.fixture
def auth_token(client, registered_user):
    """Get an auth token for the registered user."""
    response = client.post(
        "/api/auth/login",
        json={
            "email_or_username": registered_user["username"],
            "password": registered_user["password"],
        },
    )
    return response.json()["token"]


@pytest.fixture
def auth_headers(auth_token):
    """Create Authorization headers for authenticated requests."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def second_user_credentials():
    """Credentials for a second test user."""
    return {
        "username": "seconduser",
        "email": "second@example.com",
        "password": "secondpassword123",
    }


@pytest.fixture
def second_user_token(client, second_user_credentials):
    """Register a second user and return the token from registration."""
    response = client.post("/api/auth/register", json=second_user_credentials)
    return response.json()["token"]


@pytest.fixture
def second_auth_headers(second_user_token):
    """Authorization headers for the second user."""
    return {"Authorization": f"Bearer {second_user_token}"}
