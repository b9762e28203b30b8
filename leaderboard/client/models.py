"""Client-side models of the session API payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ClientUser(BaseModel):
    """Signed-in user as returned by the session API."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    id: str
    steam_id: str
    username: str
    avatar: str | None = None
    profile_url: str | None = None
    real_name: str | None = None


class StoredSession(BaseModel):
    """Token and user kept between runs."""

    session_token: str
    user: ClientUser
