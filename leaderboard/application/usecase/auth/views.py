"""Public projections shared by the auth use cases."""

from datetime import datetime

from pydantic import BaseModel

from leaderboard.domain.model import User


class UserView(BaseModel):
    """User as exposed to clients."""

    id: str
    steam_id: str
    username: str
    avatar_url: str | None = None
    profile_url: str | None = None
    real_name: str | None = None
    created_at: datetime
    last_login_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        """Project a domain user."""
        return cls(
            id=str(user.id),
            steam_id=user.steam_id.root,
            username=user.username,
            avatar_url=user.avatar_url,
            profile_url=user.profile_url,
            real_name=user.real_name,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
        )
