"""Steam OpenID and Web API adapter."""

from .client import MockSteamClient, RealSteamClient, SteamClient
from .openid import (
    SteamOpenIDVerifier,
    build_auth_url,
    parse_callback,
    relay_message_from_callback,
)

__all__ = [
    "MockSteamClient",
    "RealSteamClient",
    "SteamClient",
    "SteamOpenIDVerifier",
    "build_auth_url",
    "parse_callback",
    "relay_message_from_callback",
]
