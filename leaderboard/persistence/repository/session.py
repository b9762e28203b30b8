"""PostgreSQL implementation of Session repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.domain.model import Session
from leaderboard.domain.repository import SessionRepository
from leaderboard.domain.value import SessionToken, UserId
from leaderboard.persistence.errors import storage_errors
from leaderboard.persistence.mappers import row_to_session, session_to_dict
from leaderboard.persistence.tables import sessions_table


class PostgresSessionRepository(SessionRepository):
    """PostgreSQL implementation of SessionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def insert(self, session: Session) -> Session:
        """Insert a new session row."""
        with storage_errors("sessions.insert"):
            stmt = sessions_table.insert().values(**session_to_dict(session))
            await self.session.execute(stmt)
            await self.session.flush()
        return session

    async def deactivate_all_for_user(self, user_id: UserId) -> int:
        """Flip every active session of the user to inactive."""
        with storage_errors("sessions.deactivate_all_for_user"):
            stmt = (
                update(sessions_table)
                .where(sessions_table.c.user_id == user_id)
                .where(sessions_table.c.is_active.is_(True))
                .values(is_active=False)
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount or 0

    async def deactivate(self, token: SessionToken) -> bool:
        """Flip one session to inactive."""
        with storage_errors("sessions.deactivate"):
            stmt = (
                update(sessions_table)
                .where(sessions_table.c.token == token.root)
                .where(sessions_table.c.is_active.is_(True))
                .values(is_active=False)
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
        return (result.rowcount or 0) > 0

    async def find_by_token(self, token: SessionToken) -> Optional[Session]:
        """Find a session by token regardless of state."""
        with storage_errors("sessions.find_by_token"):
            stmt = select(sessions_table).where(sessions_table.c.token == token.root)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_session(row) if row else None

    async def find_active_by_token(
        self, token: SessionToken, now: datetime
    ) -> Optional[Session]:
        """Find a usable session by token."""
        with storage_errors("sessions.find_active_by_token"):
            stmt = (
                select(sessions_table)
                .where(sessions_table.c.token == token.root)
                .where(sessions_table.c.is_active.is_(True))
                .where(sessions_table.c.expires_at > now)
            )
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_session(row) if row else None

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions whose expiry has passed."""
        with storage_errors("sessions.delete_expired"):
            stmt = delete(sessions_table).where(sessions_table.c.expires_at <= now)
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount or 0
