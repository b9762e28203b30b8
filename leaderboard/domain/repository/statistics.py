"""User statistics repository interface."""

from abc import ABC, abstractmethod

from leaderboard.domain.model.statistics import UserStatistics
from leaderboard.domain.model.user import User
from leaderboard.domain.value import SiteId, UserId


class StatisticsRepository(ABC):
    """Repository for per-site wagering statistics."""

    @abstractmethod
    async def upsert(self, statistics: UserStatistics) -> UserStatistics:
        """Insert or replace the record for (user_id, site_id) atomically.

        The stored ``id`` of an existing record is kept.

        Args:
            statistics: New values for the pair

        Returns:
            The stored record
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[UserStatistics]:
        """List a user's records ordered by wagered amount, highest first."""
        pass

    @abstractmethod
    async def find_ranked_for_site(
        self, site_id: SiteId, limit: int
    ) -> list[tuple[UserStatistics, User]]:
        """List the top affiliated players of a site.

        Only records with an affiliate code are included, ordered by wagered
        amount, highest first.

        Args:
            site_id: Site to rank
            limit: Maximum number of rows

        Returns:
            (statistics, user) pairs in rank order
        """
        pass
