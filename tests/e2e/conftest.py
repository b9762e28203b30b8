"""Fixtures for end-to-end API tests."""

import pytest
from fastapi.testclient import TestClient

from leaderboard.adapter.steam import MockSteamClient
from leaderboard.interface.api.app import create_app
from leaderboard.persistence.repository.inmemory import InMemoryStore
from tests.di import build_test_container


@pytest.fixture
def steam() -> MockSteamClient:
    """Steam stand-in shared with the app under test."""
    return MockSteamClient()


@pytest.fixture
def store() -> InMemoryStore:
    """In-memory tables shared with the app under test."""
    return InMemoryStore()


@pytest.fixture
def client(steam, store):
    """Create test client over a fully mocked container."""
    container = build_test_container(
        context={MockSteamClient: steam, InMemoryStore: store}
    )
    return TestClient(create_app(container))
