"""Leaderboard use cases."""

from .get_leaderboard import GetLeaderboardUseCase
from .get_user_statistics import GetUserStatisticsUseCase
from .list_sites import ListSitesUseCase
from .record_statistics import RecordStatisticsUseCase

__all__ = [
    "GetLeaderboardUseCase",
    "GetUserStatisticsUseCase",
    "ListSitesUseCase",
    "RecordStatisticsUseCase",
]
