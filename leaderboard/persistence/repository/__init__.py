"""PostgreSQL repository implementations."""

from leaderboard.persistence.repository.session import PostgresSessionRepository
from leaderboard.persistence.repository.site import PostgresSiteRepository
from leaderboard.persistence.repository.statistics import (
    PostgresStatisticsRepository,
)
from leaderboard.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresSessionRepository",
    "PostgresSiteRepository",
    "PostgresStatisticsRepository",
]
