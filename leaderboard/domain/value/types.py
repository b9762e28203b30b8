"""Domain value objects for the leaderboard.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from enum import Enum

from pydantic import field_validator

from leaderboard.domain.value.common import RootValueObject, ValueObject

STEAM_ID_PATTERN = re.compile(r"[0-9]{1,20}")


class SteamId(RootValueObject[str]):
    """Steam account identifier as asserted by Steam OpenID.

    A numeric string, e.g. the 64-bit SteamID ``76561198000000000``.
    """

    @field_validator("root")
    @classmethod
    def validate_steam_id(cls, v: str) -> str:
        """Validate Steam ID is a non-empty string of digits."""
        if not STEAM_ID_PATTERN.fullmatch(v):
            raise ValueError("Steam ID must be 1-20 digits")
        return v


class SessionToken(RootValueObject[str]):
    """Opaque bearer session token."""

    @field_validator("root")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Session token must be 1-255 characters")
        return v


class ExternalIdentity(ValueObject):
    """Identity extracted from a Steam OpenID callback.

    ``nonce`` is the provider's response nonce. It correlates one login attempt
    and is not proof of authenticity on its own.
    """

    steam_id: SteamId
    nonce: str | None = None


class SteamProfile(ValueObject):
    """Canonical player profile fetched from the Steam Web API."""

    steam_id: SteamId
    username: str
    avatar_url: str | None = None
    profile_url: str | None = None
    real_name: str | None = None


class RelayMessageType(str, Enum):
    """Message types posted from the callback page to the opener."""

    SUCCESS = "STEAM_AUTH_SUCCESS"
    ERROR = "STEAM_AUTH_ERROR"


class RelayMessage(ValueObject):
    """Payload carried from the Steam callback page back to the sign-in initiator.

    Field names follow the browser-side wire format (``steamId``).
    ``assertion`` carries the raw ``openid.*`` parameters so the server can
    re-check them with Steam.
    """

    type: RelayMessageType
    steam_id: str | None = None
    ticket: str | None = None
    error: str | None = None
    assertion: dict[str, str] | None = None

    def to_wire(self) -> dict:
        """Serialize to the JSON object posted across windows."""
        data: dict = {"type": self.type.value}
        if self.steam_id is not None:
            data["steamId"] = self.steam_id
        if self.ticket is not None:
            data["ticket"] = self.ticket
        if self.error is not None:
            data["error"] = self.error
        if self.assertion is not None:
            data["assertion"] = dict(self.assertion)
        return data

    @classmethod
    def from_wire(cls, data: dict) -> "RelayMessage":
        """Parse a posted JSON object.

        Raises:
            ValueError: If the payload does not match the relay schema
        """
        if not isinstance(data, dict):
            raise ValueError("Relay message must be an object")
        message = cls(
            type=RelayMessageType(data.get("type")),
            steam_id=data.get("steamId"),
            ticket=data.get("ticket"),
            error=data.get("error"),
            assertion=data.get("assertion"),
        )
        if message.type is RelayMessageType.SUCCESS:
            SteamId(message.steam_id or "")
        return message
