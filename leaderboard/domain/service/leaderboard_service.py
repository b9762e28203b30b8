"""Leaderboard domain service."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import logfire

from leaderboard.domain.error import NotFoundError
from leaderboard.domain.model import (
    GamblingSite,
    LeaderboardEntry,
    UserStatistics,
)
from leaderboard.domain.repository import (
    SiteRepository,
    StatisticsRepository,
    UserRepository,
)
from leaderboard.domain.value import StatisticsId, SteamId, UserId

from .base import Service


class LeaderboardService(Service):
    """Ranks affiliated players per site and records their statistics."""

    def __init__(
        self,
        site_repository: SiteRepository,
        statistics_repository: StatisticsRepository,
        user_repository: UserRepository,
    ) -> None:
        self.site_repository = site_repository
        self.statistics_repository = statistics_repository
        self.user_repository = user_repository

    async def list_sites(self) -> list[GamblingSite]:
        """List active partner sites ordered by name."""
        with logfire.span("leaderboard_service.list_sites"):
            return await self.site_repository.list_active()

    async def get_site(self, site_name: str) -> GamblingSite:
        """Get a site by name.

        Raises:
            NotFoundError: If no site has this name
        """
        site = await self.site_repository.find_by_name(site_name)
        if site is None:
            logfire.warn("Site not found", site_name=site_name)
            raise NotFoundError("Site", site_name)
        return site

    async def get_leaderboard(
        self, site_name: str, limit: int = 10
    ) -> list[LeaderboardEntry]:
        """Rank the affiliated players of a site by wagered amount.

        Rank is the 1-based position in the ordering.

        Raises:
            NotFoundError: If the site does not exist
        """
        with logfire.span(
            "leaderboard_service.get_leaderboard", site_name=site_name, limit=limit
        ):
            site = await self.get_site(site_name)
            rows = await self.statistics_repository.find_ranked_for_site(
                site.id, limit
            )
            entries = [
                LeaderboardEntry(
                    rank=position,
                    user_id=user.id,
                    username=user.username,
                    avatar_url=user.avatar_url,
                    games_played=stats.games_played,
                    win_streak=stats.win_streak,
                    wagered_amount=stats.wagered_amount,
                    total_won=stats.total_won,
                    total_lost=stats.total_lost,
                    affiliate_code_used=stats.affiliate_code_used,
                    last_played_at=stats.last_played_at,
                )
                for position, (stats, user) in enumerate(rows, start=1)
            ]
            logfire.info(
                "Leaderboard built", site_name=site_name, entries=len(entries)
            )
            return entries

    async def get_user_statistics(self, user_id: UserId) -> list[UserStatistics]:
        """List a user's statistics across sites, highest wagered first."""
        with logfire.span(
            "leaderboard_service.get_user_statistics", user_id=str(user_id)
        ):
            return await self.statistics_repository.find_by_user(user_id)

    async def record_statistics(
        self,
        steam_id: SteamId,
        site_name: str,
        games_played: int,
        win_streak: int,
        wagered_amount: Decimal,
        total_won: Decimal,
        total_lost: Decimal,
        affiliate_code: str | None = None,
    ) -> UserStatistics:
        """Set a player's statistics for a site, replacing earlier values.

        Raises:
            NotFoundError: If the player or the site does not exist
        """
        with logfire.span(
            "leaderboard_service.record_statistics",
            steam_id=steam_id.root,
            site_name=site_name,
        ):
            user = await self.user_repository.find_by_steam_id(steam_id)
            if user is None:
                logfire.warn("Player not found", steam_id=steam_id.root)
                raise NotFoundError("User", steam_id.root)

            site = await self.get_site(site_name)

            now = datetime.now(timezone.utc)
            stored = await self.statistics_repository.upsert(
                UserStatistics(
                    id=StatisticsId(uuid4()),
                    user_id=user.id,
                    site_id=site.id,
                    games_played=games_played,
                    win_streak=win_streak,
                    wagered_amount=wagered_amount,
                    total_won=total_won,
                    total_lost=total_lost,
                    affiliate_code_used=affiliate_code or None,
                    last_played_at=now,
                    last_activity_at=now,
                    updated_at=now,
                )
            )
            logfire.info(
                "Statistics recorded",
                user_id=str(user.id),
                site_name=site_name,
                wagered_amount=str(wagered_amount),
            )
            return stored
