"""Get site leaderboard use case."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from leaderboard.domain.service import LeaderboardService


class GetLeaderboardRequest(BaseModel):
    """Get leaderboard request."""

    site_name: str
    limit: int = Field(default=10, ge=1, le=100)


class LeaderboardItem(BaseModel):
    """Ranked leaderboard row."""

    rank: int
    user_id: str
    username: str
    avatar_url: str | None = None
    games_played: int
    win_streak: int
    wagered_amount: Decimal
    total_won: Decimal
    total_lost: Decimal
    last_played_at: datetime | None = None


class GetLeaderboardResponse(BaseModel):
    """Get leaderboard response."""

    site_name: str
    entries: list[LeaderboardItem]


class GetLeaderboardUseCase:
    """Use case for reading a site's ranked leaderboard."""

    def __init__(self, leaderboard_service: LeaderboardService) -> None:
        """Initialize get leaderboard use case.

        Args:
            leaderboard_service: Leaderboard domain service
        """
        self.leaderboard_service = leaderboard_service

    async def execute(self, request: GetLeaderboardRequest) -> GetLeaderboardResponse:
        """Execute get leaderboard flow.

        Raises:
            NotFoundError: If the site does not exist
        """
        entries = await self.leaderboard_service.get_leaderboard(
            request.site_name, limit=request.limit
        )
        return GetLeaderboardResponse(
            site_name=request.site_name,
            entries=[
                LeaderboardItem(
                    rank=entry.rank,
                    user_id=str(entry.user_id),
                    username=entry.username,
                    avatar_url=entry.avatar_url,
                    games_played=entry.games_played,
                    win_streak=entry.win_streak,
                    wagered_amount=entry.wagered_amount,
                    total_won=entry.total_won,
                    total_lost=entry.total_lost,
                    last_played_at=entry.last_played_at,
                )
                for entry in entries
            ],
        )
