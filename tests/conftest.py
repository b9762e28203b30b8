"""Test configuration and fixtures."""

import os

import logfire
import pytest

os.environ.setdefault("ENVIRONMENT", "test")

from leaderboard.domain.value import SteamProfile  # noqa: E402
from tests.factories import make_profile  # noqa: E402

# Keep spans local; tests never ship telemetry
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def alice() -> SteamProfile:
    """Profile of a registered Steam player."""
    return make_profile("123456", "Alice")
