"""In-memory gambling site repository for testing."""

from typing import Optional

from leaderboard.domain.model.site import GamblingSite
from leaderboard.domain.repository.site import SiteRepository

from .store import InMemoryStore


class InMemorySiteRepository(SiteRepository):
    """In-memory implementation of SiteRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def list_active(self) -> list[GamblingSite]:
        """List active sites ordered by name."""
        return sorted(
            (s for s in self._store.sites.values() if s.is_active),
            key=lambda s: s.name,
        )

    async def find_by_name(self, name: str) -> Optional[GamblingSite]:
        """Find a site by name."""
        for site in self._store.sites.values():
            if site.name == name:
                return site
        return None

    async def save(self, site: GamblingSite) -> GamblingSite:
        """Save or update a site."""
        self._store.sites[site.id] = site
        return site
