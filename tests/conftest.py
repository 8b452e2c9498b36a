"""Shared fixtures for engine, store and API tests"""

import pytest
from fastapi.testclient import TestClient

from database.store import SessionStore
from server.main import create_app


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def client():
    """TestClient with its own app, so every test starts with an empty store"""
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def alice():
    return {"X-Participant-ID": "user_alice"}


@pytest.fixture
def bob():
    return {"X-Participant-ID": "user_bob"}
