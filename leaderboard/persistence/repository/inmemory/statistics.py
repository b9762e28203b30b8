"""In-memory user statistics repository for testing."""

from leaderboard.domain.model.statistics import UserStatistics
from leaderboard.domain.model.user import User
from leaderboard.domain.repository.statistics import StatisticsRepository
from leaderboard.domain.value import SiteId, UserId

from .store import InMemoryStore


class InMemoryStatisticsRepository(StatisticsRepository):
    """In-memory implementation of StatisticsRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def upsert(self, statistics: UserStatistics) -> UserStatistics:
        """Insert or replace the (user, site) record, keeping its id."""
        key = (statistics.user_id, statistics.site_id)
        existing = self._store.statistics.get(key)
        if existing is not None:
            statistics = statistics.model_copy(update={"id": existing.id})
        self._store.statistics[key] = statistics
        return statistics

    async def find_by_user(self, user_id: UserId) -> list[UserStatistics]:
        """List a user's records, highest wagered first."""
        return sorted(
            (s for s in self._store.statistics.values() if s.user_id == user_id),
            key=lambda s: s.wagered_amount,
            reverse=True,
        )

    async def find_ranked_for_site(
        self, site_id: SiteId, limit: int
    ) -> list[tuple[UserStatistics, User]]:
        """Rank affiliated players of a site by wagered amount."""
        ranked = sorted(
            (
                s
                for s in self._store.statistics.values()
                if s.site_id == site_id
                and s.affiliate_code_used is not None
                and s.user_id in self._store.users
            ),
            key=lambda s: (-s.wagered_amount, s.updated_at),
        )
        return [(s, self._store.users[s.user_id]) for s in ranked[:limit]]
