"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from leaderboard.domain.model.user import User
from leaderboard.domain.value import SteamId, SteamProfile, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_steam_id(self, steam_id: SteamId) -> Optional[User]:
        """Find a user by Steam ID.

        Args:
            steam_id: The user's Steam ID

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert_from_profile(
        self, profile: SteamProfile, login_at: datetime
    ) -> User:
        """Create or refresh the user owning ``profile.steam_id`` in one atomic step.

        On first sight a new user is inserted. Otherwise display fields and
        ``last_login_at`` are updated while ``id``, ``steam_id`` and
        ``created_at`` are kept. Concurrent calls for the same Steam ID must
        converge on a single row.

        Args:
            profile: Canonical Steam profile
            login_at: Time of this sign-in

        Returns:
            The stored user
        """
        pass
