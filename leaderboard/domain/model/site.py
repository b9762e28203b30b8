"""Partner gambling site."""

from typing import Optional

from leaderboard.domain.model.common import DomainModel
from leaderboard.domain.value import SiteId


class GamblingSite(DomainModel):
    """Affiliate partner whose wagers are ranked on a leaderboard."""

    id: SiteId
    name: str
    code: str
    logo_url: Optional[str] = None
    is_active: bool = True
