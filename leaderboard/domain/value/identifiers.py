"""Strongly typed identifiers for leaderboard entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
SiteId = NewType("SiteId", UUID)
StatisticsId = NewType("StatisticsId", UUID)
