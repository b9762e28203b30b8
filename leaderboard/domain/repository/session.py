"""Session repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from leaderboard.domain.model.session import Session
from leaderboard.domain.value import SessionToken, UserId


class SessionRepository(ABC):
    """Persisted lookup of session token to user, expiry and active flag.

    The token is the primary key. Sessions are inserted once and afterwards
    only their active flag changes.
    """

    @abstractmethod
    async def insert(self, session: Session) -> Session:
        """Insert a new session.

        Args:
            session: Session to store

        Returns:
            The stored session
        """
        pass

    @abstractmethod
    async def deactivate_all_for_user(self, user_id: UserId) -> int:
        """Deactivate every active session of a user.

        Args:
            user_id: Owner of the sessions

        Returns:
            Number of sessions deactivated
        """
        pass

    @abstractmethod
    async def deactivate(self, token: SessionToken) -> bool:
        """Deactivate a single session.

        Args:
            token: Session token

        Returns:
            True if an active session was deactivated
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: SessionToken) -> Optional[Session]:
        """Find a session by token regardless of state.

        Args:
            token: Session token

        Returns:
            The session if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_by_token(
        self, token: SessionToken, now: datetime
    ) -> Optional[Session]:
        """Find a session that is active and unexpired at ``now``.

        Args:
            token: Session token
            now: Reference time for expiry

        Returns:
            The session if usable, None otherwise
        """
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Physically remove sessions whose expiry has passed.

        Args:
            now: Reference time for expiry

        Returns:
            Number of sessions removed
        """
        pass
