"""In-memory session repository for testing."""

from datetime import datetime
from typing import Optional

from leaderboard.domain.model.session import Session
from leaderboard.domain.repository.session import SessionRepository
from leaderboard.domain.value import SessionToken, UserId

from .store import InMemoryStore


class InMemorySessionRepository(SessionRepository):
    """In-memory implementation of SessionRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def insert(self, session: Session) -> Session:
        """Insert a new session."""
        if session.token.root in self._store.sessions:
            raise ValueError("Session token already exists")
        self._store.sessions[session.token.root] = session
        return session

    async def deactivate_all_for_user(self, user_id: UserId) -> int:
        """Deactivate every active session of a user."""
        count = 0
        for token, session in list(self._store.sessions.items()):
            if session.user_id == user_id and session.is_active:
                self._store.sessions[token] = session.model_copy(
                    update={"is_active": False}
                )
                count += 1
        return count

    async def deactivate(self, token: SessionToken) -> bool:
        """Deactivate a single session."""
        session = self._store.sessions.get(token.root)
        if session is None or not session.is_active:
            return False
        self._store.sessions[token.root] = session.model_copy(
            update={"is_active": False}
        )
        return True

    async def find_by_token(self, token: SessionToken) -> Optional[Session]:
        """Find a session by token."""
        return self._store.sessions.get(token.root)

    async def find_active_by_token(
        self, token: SessionToken, now: datetime
    ) -> Optional[Session]:
        """Find a usable session by token."""
        session = self._store.sessions.get(token.root)
        if session is None or not session.is_valid_at(now):
            return None
        return session

    async def delete_expired(self, now: datetime) -> int:
        """Remove sessions past their expiry."""
        expired = [
            token
            for token, session in self._store.sessions.items()
            if session.expires_at <= now
        ]
        for token in expired:
            del self._store.sessions[token]
        return len(expired)
