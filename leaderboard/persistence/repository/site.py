"""PostgreSQL implementation of GamblingSite repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leaderboard.domain.model import GamblingSite
from leaderboard.domain.repository import SiteRepository
from leaderboard.persistence.errors import storage_errors
from leaderboard.persistence.mappers import row_to_site, site_to_dict
from leaderboard.persistence.tables import gambling_sites_table


class PostgresSiteRepository(SiteRepository):
    """PostgreSQL implementation of SiteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_active(self) -> list[GamblingSite]:
        """List active sites ordered by name."""
        with storage_errors("gambling_sites.list_active"):
            stmt = (
                select(gambling_sites_table)
                .where(gambling_sites_table.c.is_active.is_(True))
                .order_by(gambling_sites_table.c.name)
            )
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_site(row) for row in rows]

    async def find_by_name(self, name: str) -> Optional[GamblingSite]:
        """Find a site by name."""
        with storage_errors("gambling_sites.find_by_name"):
            stmt = select(gambling_sites_table).where(
                gambling_sites_table.c.name == name
            )
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_site(row) if row else None

    async def save(self, site: GamblingSite) -> GamblingSite:
        """Save a site (create or update)."""
        site_dict = site_to_dict(site)

        with storage_errors("gambling_sites.save"):
            stmt = select(gambling_sites_table.c.id).where(
                gambling_sites_table.c.id == site.id
            )
            existing = (await self.session.execute(stmt)).first()

            if existing:
                stmt = (
                    gambling_sites_table.update()
                    .where(gambling_sites_table.c.id == site.id)
                    .values(**site_dict)
                )
            else:
                stmt = gambling_sites_table.insert().values(**site_dict)
            await self.session.execute(stmt)
            await self.session.flush()
        return site
