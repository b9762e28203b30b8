"""Record player statistics use case (admin)."""

from decimal import Decimal

import logfire
from pydantic import BaseModel

from leaderboard.config import Settings
from leaderboard.domain.error import InvalidRequestError, NotAuthorizedError
from leaderboard.domain.service import LeaderboardService
from leaderboard.domain.value import SteamId

from .get_user_statistics import StatisticsItem


class RecordStatisticsRequest(BaseModel):
    """Record statistics request.

    Fields are coerced by type only.
    """

    admin_steam_id: str  # Steam ID of the signed-in caller
    steam_id: str
    site_name: str
    games_played: int = 0
    win_streak: int = 0
    wagered_amount: Decimal = Decimal("0")
    total_won: Decimal = Decimal("0")
    total_lost: Decimal = Decimal("0")
    affiliate_code: str | None = None


class RecordStatisticsResponse(BaseModel):
    """Record statistics response."""

    statistics: StatisticsItem


class RecordStatisticsUseCase:
    """Use case for setting a player's statistics for a site."""

    def __init__(
        self, leaderboard_service: LeaderboardService, settings: Settings
    ) -> None:
        """Initialize record statistics use case.

        Args:
            leaderboard_service: Leaderboard domain service
            settings: Application settings (admin allow-list)
        """
        self.leaderboard_service = leaderboard_service
        self.settings = settings

    async def execute(
        self, request: RecordStatisticsRequest
    ) -> RecordStatisticsResponse:
        """Execute record statistics flow.

        Raises:
            NotAuthorizedError: If the caller is not an admin
            InvalidRequestError: If the player Steam ID is malformed
            NotFoundError: If the player or site does not exist
        """
        if request.admin_steam_id not in self.settings.auth.admin_steam_ids:
            logfire.warn(
                "Statistics write refused", admin_steam_id=request.admin_steam_id
            )
            raise NotAuthorizedError("record statistics", request.admin_steam_id)

        try:
            steam_id = SteamId(request.steam_id)
        except ValueError as e:
            raise InvalidRequestError("Steam ID must be numeric") from e

        record = await self.leaderboard_service.record_statistics(
            steam_id=steam_id,
            site_name=request.site_name,
            games_played=request.games_played,
            win_streak=request.win_streak,
            wagered_amount=request.wagered_amount,
            total_won=request.total_won,
            total_lost=request.total_lost,
            affiliate_code=request.affiliate_code,
        )
        return RecordStatisticsResponse(
            statistics=StatisticsItem(
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
        )
