"""PostgreSQL implementation of UserStatistics repository."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.domain.model import User, UserStatistics
from leaderboard.domain.repository import StatisticsRepository
from leaderboard.domain.value import SiteId, UserId
from leaderboard.persistence.errors import storage_errors
from leaderboard.persistence.mappers import (
    USER_PREFIX,
    row_to_statistics,
    row_to_user,
    statistics_to_dict,
)
from leaderboard.persistence.tables import user_statistics_table, users_table

# Columns overwritten when a (user, site) record already exists
_MUTABLE_COLUMNS = (
    "games_played",
    "win_streak",
    "wagered_amount",
    "total_won",
    "total_lost",
    "affiliate_code_used",
    "last_played_at",
    "last_activity_at",
    "updated_at",
)


class PostgresStatisticsRepository(StatisticsRepository):
    """PostgreSQL implementation of StatisticsRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def upsert(self, statistics: UserStatistics) -> UserStatistics:
        """Insert or replace the (user, site) record in one statement."""
        stmt = pg_insert(user_statistics_table).values(
            **statistics_to_dict(statistics)
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_user_statistics_user_site",
            set_={name: stmt.excluded[name] for name in _MUTABLE_COLUMNS},
        ).returning(*user_statistics_table.c)

        with storage_errors("user_statistics.upsert"):
            result = await self.session.execute(stmt)
            row = result.mappings().one()
            await self.session.flush()
        return row_to_statistics(row)

    async def find_by_user(self, user_id: UserId) -> list[UserStatistics]:
        """List a user's records, highest wagered first."""
        with storage_errors("user_statistics.find_by_user"):
            stmt = (
                select(user_statistics_table)
                .where(user_statistics_table.c.user_id == user_id)
                .order_by(user_statistics_table.c.wagered_amount.desc())
            )
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_statistics(row) for row in rows]

    async def find_ranked_for_site(
        self, site_id: SiteId, limit: int
    ) -> list[tuple[UserStatistics, User]]:
        """Join statistics with their users and rank by wagered amount."""
        user_columns = [c.label(f"{USER_PREFIX}{c.name}") for c in users_table.c]
        stmt = (
            select(user_statistics_table, *user_columns)
            .select_from(
                user_statistics_table.join(
                    users_table, users_table.c.id == user_statistics_table.c.user_id
                )
            )
            .where(user_statistics_table.c.site_id == site_id)
            .where(user_statistics_table.c.affiliate_code_used.is_not(None))
            .order_by(
                user_statistics_table.c.wagered_amount.desc(),
                user_statistics_table.c.updated_at,
            )
            .limit(limit)
        )

        with storage_errors("user_statistics.find_ranked_for_site"):
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [
            (row_to_statistics(row), row_to_user(row, prefix=USER_PREFIX))
            for row in rows
        ]
