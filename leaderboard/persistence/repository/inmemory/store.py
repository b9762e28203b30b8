"""Shared backing store for the in-memory repositories."""

from leaderboard.domain.model import GamblingSite, Session, User, UserStatistics
from leaderboard.domain.value import SiteId, UserId


class InMemoryStore:
    """Tables of the in-memory persistence component.

    One store outlives many requests so that repositories created per request
    see each other's writes.
    """

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        self.sessions: dict[str, Session] = {}
        self.sites: dict[SiteId, GamblingSite] = {}
        self.statistics: dict[tuple[UserId, SiteId], UserStatistics] = {}

    def clear(self) -> None:
        """Drop every row."""
        self.users.clear()
        self.sessions.clear()
        self.sites.clear()
        self.statistics.clear()
