"""Pytest fixtures for API integration tests."""

import pytest
from fastapi.testclient import TestClient

from sesame.presentation.api.app import API_V1_PREFIX, create_app
from sesame_config.settings import Settings
from tests.shared.factories import TEST_PASSWORD, TEST_ROUNDS, TEST_SECRET, sqlite_url


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings backed by a fresh SQLite file."""
    return Settings(
        _env_file=None,
        jwt_secret_key=TEST_SECRET,
        store_uri=sqlite_url(tmp_path),
        store_collection="accounts",
        password_hash_rounds=TEST_ROUNDS,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
    )


@pytest.fixture
def test_client(api_settings):
    """Create a test client; entering it runs the application lifespan."""
    with TestClient(create_app(settings=api_settings)) as client:
        yield client


@pytest.fixture
def registration_payload() -> dict:
    """Valid registration body."""
    return {
        "first_name": "Alice",
        "last_name": "Liddell",
        "email": "a@x.io",
        "username": "alice",
        "password": TEST_PASSWORD,
        "confirm_password": TEST_PASSWORD,
    }


@pytest.fixture
def registered(test_client, registration_payload, api_v1_prefix) -> dict:
    """Register the default account and return the token response."""
    response = test_client.post(
        f"{api_v1_prefix}/auth/register",
        json=registration_payload,
    )
    assert response.status_code == 201
    return response.json()
