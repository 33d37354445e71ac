"""Pytest configuration and fixtures."""

import os

# Settings are read at import time, so the environment must be prepared
# before the application package is imported.
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("SEED_USERS", "true")

import pytest
from fastapi.testclient import TestClient

from user_registry_api.app.main import create_app
from user_registry_api.app.services.user_service import InMemoryUserStore, seed_users


@pytest.fixture
def store():
    """A store holding the four fixture users."""
    return InMemoryUserStore(seed_users())


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
