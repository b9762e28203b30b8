"""Get the signed-in user's statistics use case."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from leaderboard.domain.service import LeaderboardService
from leaderboard.domain.value import UserId


class GetUserStatisticsRequest(BaseModel):
    """Get user statistics request."""

    user_id: UserId


class StatisticsItem(BaseModel):
    """Statistics for one site."""

    site_id: str
    games_played: int
    win_streak: int
    wagered_amount: Decimal
    total_won: Decimal
    total_lost: Decimal
    affiliate_code_used: str | None = None
    last_played_at: datetime | None = None
    updated_at: datetime


class GetUserStatisticsResponse(BaseModel):
    """Get user statistics response."""

    statistics: list[StatisticsItem]


class GetUserStatisticsUseCase:
    """Use case for listing a user's statistics across sites."""

    def __init__(self, leaderboard_service: LeaderboardService) -> None:
        self.leaderboard_service = leaderboard_service

    async def execute(
        self, request: GetUserStatisticsRequest
    ) -> GetUserStatisticsResponse:
        """List the user's statistics, highest wagered first."""
        records = await self.leaderboard_service.get_user_statistics(request.user_id)
        return GetUserStatisticsResponse(
            statistics=[
                StatisticsItem(
                    site_id=str(record.site_id),
                    games_played=record.games_played,
                    win_streak=record.win_streak,
                    wagered_amount=record.wagered_amount,
                    total_won=record.total_won,
                    total_lost=record.total_lost,
                    affiliate_code_used=record.affiliate_code_used,
                    last_played_at=record.last_played_at,
                    updated_at=record.updated_at,
                )
                for record in records
            ]
        )
