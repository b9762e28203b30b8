"""List gambling sites use case."""

import logfire
from pydantic import BaseModel

from leaderboard.domain.service import LeaderboardService


class SiteItem(BaseModel):
    """Site item in response."""

    id: str
    name: str
    code: str
    logo_url: str | None = None


class ListSitesResponse(BaseModel):
    """List sites response."""

    sites: list[SiteItem]


class ListSitesUseCase:
    """Use case for listing active partner sites."""

    def __init__(self, leaderboard_service: LeaderboardService) -> None:
        self.leaderboard_service = leaderboard_service

    async def execute(self) -> ListSitesResponse:
        """List active sites ordered by name."""
        sites = await self.leaderboard_service.list_sites()
        logfire.info("Sites listed", count=len(sites))
        return ListSitesResponse(
            sites=[
                SiteItem(
                    id=str(site.id),
                    name=site.name,
                    code=site.code,
                    logo_url=site.logo_url,
                )
                for site in sites
            ]
        )
