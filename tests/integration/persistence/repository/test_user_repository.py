"""Integration tests for PostgresUserRepository."""

import asyncio
import random
from datetime import datetime, timezone

import pytest

from leaderboard.domain.repository import UserRepository
from leaderboard.domain.value import SteamId
from tests.di import build_test_container
from tests.factories import make_profile
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def _steam_id() -> str:
    return str(random.randint(10**15, 10**16))


class TestUserRepositoryIntegration:
    """Integration tests for PostgresUserRepository."""

    @pytest.mark.asyncio
    async def test_upsert_inserts_then_refreshes(self, integration_env):
        """Should keep id and created_at and refresh display fields."""
        repo = await integration_env.get(UserRepository)
        steam_id = _steam_id()
        first_login = datetime(2026, 1, 1, tzinfo=timezone.utc)
        second_login = datetime(2026, 2, 1, tzinfo=timezone.utc)

        created = await repo.upsert_from_profile(make_profile(steam_id, "Old"), first_login)
        updated = await repo.upsert_from_profile(
            make_profile(steam_id, "New"), second_login
        )

        assert updated.id == created.id
        assert updated.created_at == first_login
        assert updated.last_login_at == second_login
        assert updated.username == "New"
        assert (await repo.find_by_steam_id(SteamId(steam_id))).username == "New"

    @pytest.mark.asyncio
    async def test_concurrent_first_sign_ins_converge(self):
        """Should create exactly one user for simultaneous first sign-ins."""
        container = build_test_container(unmock={"persistence"})
        steam_id = _steam_id()

        async def sign_in(username: str):
            async with container() as request_container:
                repo = await request_container.get(UserRepository)
                return await repo.upsert_from_profile(
                    make_profile(steam_id, username), datetime.now(timezone.utc)
                )

        try:
            users = await asyncio.gather(*(sign_in(f"u{i}") for i in range(5)))
        finally:
            await container.close()

        assert len({u.id for u in users}) == 1
