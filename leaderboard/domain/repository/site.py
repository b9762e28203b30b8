"""Gambling site repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from leaderboard.domain.model.site import GamblingSite


class SiteRepository(ABC):
    """Repository for partner gambling sites."""

    @abstractmethod
    async def list_active(self) -> list[GamblingSite]:
        """List active sites ordered by name."""
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[GamblingSite]:
        """Find a site by its display name."""
        pass

    @abstractmethod
    async def save(self, site: GamblingSite) -> GamblingSite:
        """Save a site (create or update)."""
        pass
