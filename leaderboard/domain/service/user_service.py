"""User domain service."""

from datetime import datetime, timezone

import logfire

from leaderboard.domain.error import NotFoundError
from leaderboard.domain.model import User
from leaderboard.domain.repository import UserRepository
from leaderboard.domain.value import SteamId, SteamProfile, UserId

from .base import Service


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_by_steam_id(self, steam_id: SteamId) -> User:
        """Get user by Steam ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_steam_id", steam_id=steam_id.root):
            user = await self.user_repository.find_by_steam_id(steam_id)
            if not user:
                logfire.warn("User not found", steam_id=steam_id.root)
                raise NotFoundError("User", steam_id.root)
            return user

    async def record_login(self, profile: SteamProfile) -> User:
        """Create or refresh the user for a signed-in Steam profile.

        Args:
            profile: Canonical Steam profile

        Returns:
            The stored user
        """
        with logfire.span(
            "user_service.record_login", steam_id=profile.steam_id.root
        ):
            user = await self.user_repository.upsert_from_profile(
                profile, datetime.now(timezone.utc)
            )
            logfire.info(
                "User login recorded",
                user_id=str(user.id),
                steam_id=user.steam_id.root,
                is_new_user=user.created_at == user.last_login_at,
            )
            return user
