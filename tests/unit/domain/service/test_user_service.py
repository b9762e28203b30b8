"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from leaderboard.domain.error import NotFoundError
from leaderboard.domain.service import UserService
from leaderboard.domain.value import SteamId, UserId
from leaderboard.persistence.repository.inmemory import InMemoryUserRepository
from tests.factories import make_profile


class TestRecordLogin:
    """Tests for UserService.record_login()."""

    @pytest.mark.asyncio
    async def test_first_login_creates_user(self, alice):
        """Should create a user from the Steam profile."""
        service = UserService(InMemoryUserRepository())

        user = await service.record_login(alice)

        assert user.steam_id == SteamId("123456")
        assert user.username == "Alice"
        assert user.created_at == user.last_login_at

    @pytest.mark.asyncio
    async def test_repeat_login_refreshes_profile(self, alice):
        """Should keep id and created_at and refresh display fields."""
        service = UserService(InMemoryUserRepository())
        first = await service.record_login(alice)

        renamed = alice.model_copy(update={"username": "Alice2", "avatar_url": None})
        second = await service.record_login(renamed)

        assert second.id == first.id
        assert second.created_at == first.created_at
        assert second.username == "Alice2"
        assert second.avatar_url is None
        assert second.last_login_at >= first.last_login_at

    @pytest.mark.asyncio
    async def test_distinct_steam_ids_get_distinct_users(self):
        """Should create one user per Steam ID."""
        service = UserService(InMemoryUserRepository())

        a = await service.record_login(make_profile("1"))
        b = await service.record_login(make_profile("2"))

        assert a.id != b.id


class TestLookup:
    """Tests for UserService.get_by_id() and get_by_steam_id()."""

    @pytest.mark.asyncio
    async def test_get_by_id(self, alice):
        """Should find a stored user by id."""
        service = UserService(InMemoryUserRepository())
        user = await service.record_login(alice)

        assert (await service.get_by_id(user.id)).steam_id == alice.steam_id

    @pytest.mark.asyncio
    async def test_get_by_steam_id(self, alice):
        """Should find a stored user by Steam ID."""
        service = UserService(InMemoryUserRepository())
        user = await service.record_login(alice)

        assert (await service.get_by_steam_id(alice.steam_id)).id == user.id

    @pytest.mark.asyncio
    async def test_missing_user(self):
        """Should raise NotFoundError for unknown users."""
        service = UserService(InMemoryUserRepository())

        with pytest.raises(NotFoundError):
            await service.get_by_id(UserId(uuid4()))
        with pytest.raises(NotFoundError):
            await service.get_by_steam_id(SteamId("999"))
