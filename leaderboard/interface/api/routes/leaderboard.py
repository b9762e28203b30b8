"""Leaderboard, site and statistics routes."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query

from leaderboard.application.usecase.auth import VerifySessionUseCase
from leaderboard.application.usecase.auth.verify_session import (
    VerifySessionRequest,
)
from leaderboard.application.usecase.leaderboard import (
    GetLeaderboardUseCase,
    GetUserStatisticsUseCase,
    ListSitesUseCase,
    RecordStatisticsUseCase,
)
from leaderboard.application.usecase.leaderboard.get_leaderboard import (
    GetLeaderboardRequest,
)
from leaderboard.application.usecase.leaderboard.get_user_statistics import (
    GetUserStatisticsRequest,
    StatisticsItem,
)
from leaderboard.application.usecase.leaderboard.record_statistics import (
    RecordStatisticsRequest,
)
from leaderboard.domain.value import UserId
from leaderboard.interface.api.dependencies import bearer_token
from leaderboard.interface.api.schemas import CamelModel

logger = logging.getLogger(__name__)

router = APIRouter(tags=["leaderboard"], route_class=DishkaRoute)


class SitePayload(CamelModel):
    id: str
    name: str
    code: str
    logo_url: str | None = None


class SitesResponse(CamelModel):
    success: bool = True
    sites: list[SitePayload]


class LeaderboardEntryPayload(CamelModel):
    rank: int
    user_id: str
    username: str
    avatar: str | None = None
    games_played: int
    win_streak: int
    wagered_amount: Decimal
    total_won: Decimal
    total_lost: Decimal
    last_played_at: datetime | None = None


class LeaderboardResponse(CamelModel):
    success: bool = True
    site_name: str
    entries: list[LeaderboardEntryPayload]


class StatisticsPayload(CamelModel):
    site_id: str
    games_played: int
    win_streak: int
    wagered_amount: Decimal
    total_won: Decimal
    total_lost: Decimal
    affiliate_code_used: str | None = None
    last_played_at: datetime | None = None
    updated_at: datetime

    @classmethod
    def from_item(cls, item: StatisticsItem) -> "StatisticsPayload":
        return cls(**item.model_dump())


class StatisticsResponse(CamelModel):
    success: bool = True
    statistics: list[StatisticsPayload]


class RecordStatisticsAPIRequest(CamelModel):
    """Body of ``PUT /admin/statistics``."""

    steam_id: str
    site_name: str
    games_played: int = 0
    win_streak: int = 0
    wagered_amount: Decimal = Decimal("0")
    total_won: Decimal = Decimal("0")
    total_lost: Decimal = Decimal("0")
    affiliate_code: str | None = None


class RecordStatisticsAPIResponse(CamelModel):
    success: bool = True
    statistics: StatisticsPayload


@router.get("/sites", response_model=SitesResponse)
async def list_sites(
    list_sites_use_case: FromDishka[ListSitesUseCase],
) -> SitesResponse:
    """List active partner sites."""
    result = await list_sites_use_case.execute()
    return SitesResponse(
        sites=[SitePayload(**site.model_dump()) for site in result.sites]
    )


@router.get("/leaderboard/{site_name}", response_model=LeaderboardResponse)
async def get_leaderboard(
    site_name: str,
    get_leaderboard_use_case: FromDishka[GetLeaderboardUseCase],
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> LeaderboardResponse:
    """Top affiliated players of a site, ranked by wagered amount.

    Example:
        GET /leaderboard/Stake?limit=3
    """
    result = await get_leaderboard_use_case.execute(
        GetLeaderboardRequest(site_name=site_name, limit=limit)
    )
    return LeaderboardResponse(
        site_name=result.site_name,
        entries=[
            LeaderboardEntryPayload(
                rank=entry.rank,
                user_id=entry.user_id,
                username=entry.username,
                avatar=entry.avatar_url,
                games_played=entry.games_played,
                win_streak=entry.win_streak,
                wagered_amount=entry.wagered_amount,
                total_won=entry.total_won,
                total_lost=entry.total_lost,
                last_played_at=entry.last_played_at,
            )
            for entry in result.entries
        ],
    )


@router.get("/users/me/statistics", response_model=StatisticsResponse)
async def my_statistics(
    token: Annotated[str, Depends(bearer_token)],
    verify_use_case: FromDishka[VerifySessionUseCase],
    statistics_use_case: FromDishka[GetUserStatisticsUseCase],
) -> StatisticsResponse:
    """Statistics of the signed-in player across all sites."""
    session_user = await verify_use_case.execute(
        VerifySessionRequest(session_token=token)
    )
    result = await statistics_use_case.execute(
        GetUserStatisticsRequest(user_id=UserId(UUID(session_user.user.id)))
    )
    return StatisticsResponse(
        statistics=[StatisticsPayload.from_item(item) for item in result.statistics]
    )


@router.put("/admin/statistics", response_model=RecordStatisticsAPIResponse)
async def record_statistics(
    request: RecordStatisticsAPIRequest,
    token: Annotated[str, Depends(bearer_token)],
    verify_use_case: FromDishka[VerifySessionUseCase],
    record_use_case: FromDishka[RecordStatisticsUseCase],
) -> RecordStatisticsAPIResponse:
    """Set a player's statistics for a site. Admins only."""
    admin = await verify_use_case.execute(VerifySessionRequest(session_token=token))
    logger.info(
        f"Statistics update by {admin.user.steam_id} for "
        f"{request.steam_id} on {request.site_name}"
    )
    result = await record_use_case.execute(
        RecordStatisticsRequest(
            admin_steam_id=admin.user.steam_id,
            **request.model_dump(),
        )
    )
    return RecordStatisticsAPIResponse(
        statistics=StatisticsPayload.from_item(result.statistics)
    )
