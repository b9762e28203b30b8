"""Wire models shared by the API routes (camelCase JSON)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from leaderboard.application.usecase.auth.views import UserView


class CamelModel(BaseModel):
    """Model serialized with camelCase keys; accepts either case on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserPayload(CamelModel):
    """User as sent to the browser."""

    id: str
    steam_id: str
    username: str
    avatar: str | None = None
    profile_url: str | None = None
    real_name: str | None = None
    created_at: datetime
    last_login_at: datetime

    @classmethod
    def from_view(cls, view: UserView) -> "UserPayload":
        """Build from the application projection."""
        return cls(
            id=view.id,
            steam_id=view.steam_id,
            username=view.username,
            avatar=view.avatar_url,
            profile_url=view.profile_url,
            real_name=view.real_name,
            created_at=view.created_at,
            last_login_at=view.last_login_at,
        )


class SuccessResponse(CamelModel):
    """Bare success envelope."""

    success: bool = True
