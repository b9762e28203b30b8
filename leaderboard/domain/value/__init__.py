"""Domain value objects for the leaderboard."""

from leaderboard.domain.value.identifiers import SiteId, StatisticsId, UserId
from leaderboard.domain.value.types import (
    ExternalIdentity,
    RelayMessage,
    RelayMessageType,
    SessionToken,
    SteamId,
    SteamProfile,
)

__all__ = [
    # Identifiers
    "UserId",
    "SiteId",
    "StatisticsId",
    # Types
    "ExternalIdentity",
    "RelayMessage",
    "RelayMessageType",
    "SessionToken",
    "SteamId",
    "SteamProfile",
]
