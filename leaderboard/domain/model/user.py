"""User aggregate root.

Users are created on their first Steam sign-in and keyed by Steam ID.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from leaderboard.domain.model.common import DomainModel
from leaderboard.domain.value import SteamId, UserId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(DomainModel):
    """Player account backed by a Steam identity.

    ``steam_id`` and ``id`` never change once assigned. Display fields are
    refreshed from the Steam profile on every sign-in.
    """

    id: UserId
    steam_id: SteamId
    username: str
    avatar_url: Optional[str] = None
    profile_url: Optional[str] = None
    real_name: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    last_login_at: datetime = Field(default_factory=_utcnow)
