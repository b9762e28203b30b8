"""Per-site wagering statistics."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import Field

from leaderboard.domain.model.common import DomainModel
from leaderboard.domain.value import SiteId, StatisticsId, UserId


class UserStatistics(DomainModel):
    """A player's wagering record on one site.

    One record exists per (user, site) pair.
    """

    id: StatisticsId
    user_id: UserId
    site_id: SiteId
    games_played: int = 0
    win_streak: int = 0
    wagered_amount: Decimal = Decimal("0")
    total_won: Decimal = Decimal("0")
    total_lost: Decimal = Decimal("0")
    affiliate_code_used: Optional[str] = None
    last_played_at: Optional[datetime] = None
    last_activity_at: Optional[datetime] = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class LeaderboardEntry(DomainModel):
    """Ranked row of a site leaderboard."""

    rank: int
    user_id: UserId
    username: str
    avatar_url: Optional[str] = None
    games_played: int
    win_streak: int
    wagered_amount: Decimal
    total_won: Decimal
    total_lost: Decimal
    affiliate_code_used: Optional[str] = None
    last_played_at: Optional[datetime] = None
