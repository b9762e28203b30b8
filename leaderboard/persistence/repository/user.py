"""PostgreSQL implementation of User repository."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.domain.model import User
from leaderboard.domain.repository import UserRepository
from leaderboard.domain.value import SteamId, SteamProfile, UserId
from leaderboard.persistence.errors import storage_errors
from leaderboard.persistence.mappers import row_to_user
from leaderboard.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        with storage_errors("users.find_by_id"):
            stmt = select(users_table).where(users_table.c.id == user_id)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_user(row) if row else None

    async def find_by_steam_id(self, steam_id: SteamId) -> Optional[User]:
        """Find a user by Steam ID."""
        with storage_errors("users.find_by_steam_id"):
            stmt = select(users_table).where(users_table.c.steam_id == steam_id.root)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_user(row) if row else None

    async def upsert_from_profile(
        self, profile: SteamProfile, login_at: datetime
    ) -> User:
        """Insert or refresh the user with a single ``ON CONFLICT`` statement.

        Concurrent sign-ins for one Steam ID race on the unique constraint,
        never on a read-then-write, so they converge on one row.
        """
        stmt = pg_insert(users_table).values(
            id=uuid4(),
            steam_id=profile.steam_id.root,
            username=profile.username,
            avatar_url=profile.avatar_url,
            profile_url=profile.profile_url,
            real_name=profile.real_name,
            created_at=login_at,
            last_login_at=login_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.steam_id],
            set_={
                "username": stmt.excluded.username,
                "avatar_url": stmt.excluded.avatar_url,
                "profile_url": stmt.excluded.profile_url,
                "real_name": stmt.excluded.real_name,
                "last_login_at": stmt.excluded.last_login_at,
            },
        ).returning(*users_table.c)

        with storage_errors("users.upsert_from_profile"):
            result = await self.session.execute(stmt)
            row = result.mappings().one()
            await self.session.flush()
        return row_to_user(row)
