"""In-memory user repository for testing."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from leaderboard.domain.model.user import User
from leaderboard.domain.repository.user import UserRepository
from leaderboard.domain.value import SteamId, SteamProfile, UserId

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._store.users.get(user_id)

    async def find_by_steam_id(self, steam_id: SteamId) -> Optional[User]:
        """Find a user by Steam ID."""
        for user in self._store.users.values():
            if user.steam_id == steam_id:
                return user
        return None

    async def upsert_from_profile(
        self, profile: SteamProfile, login_at: datetime
    ) -> User:
        """Insert or refresh the user.

        No await between lookup and write, so this is atomic under asyncio.
        """
        existing = next(
            (u for u in self._store.users.values() if u.steam_id == profile.steam_id),
            None,
        )
        if existing is None:
            user = User(
                id=UserId(uuid4()),
                steam_id=profile.steam_id,
                username=profile.username,
                avatar_url=profile.avatar_url,
                profile_url=profile.profile_url,
                real_name=profile.real_name,
                created_at=login_at,
                last_login_at=login_at,
            )
        else:
            user = existing.model_copy(
                update={
                    "username": profile.username,
                    "avatar_url": profile.avatar_url,
                    "profile_url": profile.profile_url,
                    "real_name": profile.real_name,
                    "last_login_at": login_at,
                }
            )
        self._store.users[user.id] = user
        return user
