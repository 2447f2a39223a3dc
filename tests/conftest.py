# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Builds an isolated app per test on top of an in-memory store
# - Provides a registered user and auth headers for API tests
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds a default app at import time from environment settings

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from core.services import AuthService, ContactService, ContactValidator
from lib.document_store import InMemoryDocumentStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Settings for tests, independent of any local .env file."""
    return Settings(
        _env_file=None,
        ENVIRONMENT="development",
        DEBUG=True,
        STORE_BACKEND="memory",
        SECRET_KEY="test-secret-key-0123456789",
        BCRYPT_ROUNDS=4,
        ACCESS_TOKEN_EXPIRE_MINUTES=30,
        PASSWORD_MIN_LENGTH=6,
        VALIDATION_POLICY="lenient",
    )


@pytest.fixture
def store():
    """Fresh, connected in-memory store."""
    store = InMemoryDocumentStore(unique_fields={"users": ["username"]})
    store.connect()
    return store


@pytest.fixture
def auth_service(store, settings):
    return AuthService(store, settings)


@pytest.fixture
def contact_service(store):
    return ContactService(store, ContactValidator("lenient"))


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    """TestClient with lifespan events running."""
    with TestClient(app) as test_client:
        yield test_client


def register(client, username: str, password: str = "secret123") -> dict:
    """Register a user through the API and return the response body."""
    response = client.post("/api/users/register", json={"username": username, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def alice(client):
    """Registered user 'alice' with their token and auth headers."""
    body = register(client, "alice")
    return {
        "user": body["user"],
        "token": body["token"],
        "headers": {"Authorization": f"Bearer {body['token']}"},
    }


@pytest.fixture
def bob(client):
    """Registered user 'bob' with their token and auth headers."""
    body = register(client, "bob", "hunter22")
    return {
        "user": body["user"],
        "token": body["token"],
        "headers": {"Authorization": f"Bearer {body['token']}"},
    }


@pytest.fixture
def sample_contact_data():
    """Sample contact payload."""
    return {"name": "Bob", "email": "bob@x.com", "phone": "555-0100"}
