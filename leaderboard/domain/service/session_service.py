"""Session domain service."""

import secrets
from datetime import datetime, timedelta, timezone

import logfire

from leaderboard.config import AuthSettings
from leaderboard.domain.error import SessionExpiredError, SessionNotFoundError
from leaderboard.domain.model.session import Session
from leaderboard.domain.repository.session import SessionRepository
from leaderboard.domain.value import SessionToken, UserId

from .base import Service


def generate_session_token() -> SessionToken:
    """Generate an unguessable session token (256 bits of entropy)."""
    return SessionToken(secrets.token_urlsafe(32))


class SessionService(Service):
    """Issues, verifies and revokes bearer sessions.

    Policy: one active session per user. Issuing a session deactivates every
    earlier session of the same user.
    """

    def __init__(
        self, session_repository: SessionRepository, auth_settings: AuthSettings
    ) -> None:
        """Initialize session service.

        Args:
            session_repository: Session store
            auth_settings: Authentication settings (session TTL)
        """
        self.session_repository = session_repository
        self.auth_settings = auth_settings

    @property
    def ttl(self) -> timedelta:
        """Lifetime of a newly issued session."""
        return timedelta(days=self.auth_settings.session_ttl_days)

    async def issue(self, user_id: UserId) -> Session:
        """Issue a fresh session and invalidate the user's previous ones.

        Args:
            user_id: Owner of the new session

        Returns:
            The new active session
        """
        with logfire.span("session_service.issue", user_id=str(user_id)):
            deactivated = await self.session_repository.deactivate_all_for_user(
                user_id
            )

            now = datetime.now(timezone.utc)
            session = Session(
                token=generate_session_token(),
                user_id=user_id,
                created_at=now,
                expires_at=now + self.ttl,
                is_active=True,
            )
            await self.session_repository.insert(session)

            logfire.info(
                "Session issued",
                user_id=str(user_id),
                expires_at=session.expires_at.isoformat(),
                deactivated=deactivated,
            )
            return session

    async def verify(self, token: SessionToken) -> Session:
        """Resolve a token to its session if it is still usable.

        Args:
            token: Presented bearer token

        Returns:
            The active, unexpired session

        Raises:
            SessionNotFoundError: If no session has this token
            SessionExpiredError: If the session was deactivated or expired
        """
        with logfire.span("session_service.verify"):
            session = await self.session_repository.find_by_token(token)
            if session is None:
                logfire.info("Session not found")
                raise SessionNotFoundError()

            if not session.is_valid_at(datetime.now(timezone.utc)):
                logfire.info(
                    "Session no longer valid",
                    user_id=str(session.user_id),
                    is_active=session.is_active,
                )
                raise SessionExpiredError()

            return session

    async def revoke(self, token: SessionToken) -> bool:
        """Deactivate a session (logout).

        Args:
            token: Session token

        Returns:
            True if an active session was deactivated
        """
        with logfire.span("session_service.revoke"):
            revoked = await self.session_repository.deactivate(token)
            logfire.info("Session revoke requested", revoked=revoked)
            return revoked

    async def purge_expired(self) -> int:
        """Delete sessions past their expiry.

        Returns:
            Number of sessions removed
        """
        with logfire.span("session_service.purge_expired"):
            removed = await self.session_repository.delete_expired(
                datetime.now(timezone.utc)
            )
            logfire.info("Expired sessions purged", removed=removed)
            return removed
