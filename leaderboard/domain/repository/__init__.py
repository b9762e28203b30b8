"""Repository interfaces for the leaderboard domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from leaderboard.domain.repository.session import SessionRepository
from leaderboard.domain.repository.site import SiteRepository
from leaderboard.domain.repository.statistics import StatisticsRepository
from leaderboard.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "SessionRepository",
    "SiteRepository",
    "StatisticsRepository",
]
