"""Domain model entities for the leaderboard."""

from leaderboard.domain.model.session import Session
from leaderboard.domain.model.site import GamblingSite
from leaderboard.domain.model.statistics import LeaderboardEntry, UserStatistics
from leaderboard.domain.model.user import User

__all__ = [
    "User",
    "Session",
    "GamblingSite",
    "UserStatistics",
    "LeaderboardEntry",
]
