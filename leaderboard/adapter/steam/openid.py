"""Steam OpenID 2.0 redirect construction and callback parsing.

Steam only supports the ``identifier_select`` flow: the user picks the
account at steamcommunity.com and Steam redirects back to ``return_to`` with
the claimed identity ``https://steamcommunity.com/openid/id/<steamid64>``.
"""

import re
from collections.abc import Mapping
from urllib.parse import urlencode, urlsplit

import httpx
import logfire

from leaderboard.adapter.error import (
    AuthCancelledError,
    CallbackError,
    MalformedResponseError,
)
from leaderboard.domain.error import UpstreamUnavailableError
from leaderboard.domain.value import (
    ExternalIdentity,
    RelayMessage,
    RelayMessageType,
    SteamId,
)

OPENID_NS = "http://specs.openid.net/auth/2.0"
IDENTIFIER_SELECT = "http://specs.openid.net/auth/2.0/identifier_select"
STEAM_OPENID_ENDPOINT = "https://steamcommunity.com/openid/login"

IDENTITY_PATTERN = re.compile(r"/id/([0-9]+)\Z")

CANCELLED_MESSAGE = "Authentication cancelled"

__all__ = [
    "AuthCancelledError",
    "CANCELLED_MESSAGE",
    "CallbackError",
    "IDENTIFIER_SELECT",
    "MalformedResponseError",
    "OPENID_NS",
    "STEAM_OPENID_ENDPOINT",
    "SteamOpenIDVerifier",
    "build_auth_url",
    "parse_callback",
    "realm_for",
    "relay_message_from_callback",
]


def realm_for(return_url: str) -> str:
    """Derive the OpenID realm (scheme and authority, no path) of a URL.

    Args:
        return_url: Absolute callback URL

    Returns:
        ``scheme://host`` or ``scheme://host:port`` when a port is explicit

    Raises:
        ValueError: If the URL has no scheme or host
    """
    parts = urlsplit(return_url)
    if not parts.scheme or not parts.hostname:
        raise ValueError(f"Return URL must be absolute: {return_url!r}")

    realm = f"{parts.scheme}://{parts.hostname}"
    if parts.port is not None:
        realm = f"{realm}:{parts.port}"
    return realm


def build_auth_url(return_url: str, endpoint: str = STEAM_OPENID_ENDPOINT) -> str:
    """Build the Steam login URL the browser is sent to.

    Args:
        return_url: Exact URL Steam redirects back to
        endpoint: Steam OpenID endpoint

    Returns:
        Login URL with the OpenID ``checkid_setup`` query
    """
    params = {
        "openid.ns": OPENID_NS,
        "openid.mode": "checkid_setup",
        "openid.return_to": return_url,
        "openid.realm": realm_for(return_url),
        "openid.identity": IDENTIFIER_SELECT,
        "openid.claimed_id": IDENTIFIER_SELECT,
    }
    return f"{endpoint}?{urlencode(params)}"


def parse_callback(params: Mapping[str, str]) -> ExternalIdentity:
    """Extract the Steam identity from the callback query.

    The response nonce is returned for correlation only. It proves nothing
    until the assertion is checked with Steam.

    Args:
        params: Callback query parameters

    Returns:
        Identity asserted by Steam

    Raises:
        AuthCancelledError: If Steam reports ``openid.mode=cancel``
        MalformedResponseError: For any other non-success callback
    """
    mode = params.get("openid.mode")
    if mode == "cancel":
        raise AuthCancelledError(CANCELLED_MESSAGE)
    if mode != "id_res":
        raise MalformedResponseError(
            "Authentication failed - invalid response from Steam"
        )

    identity = params.get("openid.identity") or params.get("openid.claimed_id") or ""
    match = IDENTITY_PATTERN.search(identity)
    if not match:
        raise MalformedResponseError("Steam identity URL is missing or invalid")

    try:
        steam_id = SteamId(match.group(1))
    except ValueError as e:
        raise MalformedResponseError(str(e)) from e

    return ExternalIdentity(
        steam_id=steam_id, nonce=params.get("openid.response_nonce")
    )


class SteamOpenIDVerifier:
    """Checks relayed assertions directly with Steam.

    A relayed Steam ID is only a claim. Re-posting the signed fields with
    ``openid.mode=check_authentication`` lets Steam confirm the signature.
    """

    def __init__(
        self,
        endpoint: str = STEAM_OPENID_ENDPOINT,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize verifier.

        Args:
            endpoint: Steam OpenID endpoint
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    async def check_authentication(self, params: Mapping[str, str]) -> bool:
        """Ask Steam whether the assertion carries a valid signature.

        Args:
            params: Raw ``openid.*`` callback parameters

        Returns:
            True if Steam answers ``is_valid:true``

        Raises:
            UpstreamUnavailableError: If Steam cannot be reached or errors
        """
        data = {k: v for k, v in params.items() if k.startswith("openid.")}
        data["openid.mode"] = "check_authentication"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.endpoint, data=data)
        except httpx.HTTPError as e:
            logfire.error("Steam check_authentication HTTP error", error=str(e))
            raise UpstreamUnavailableError(
                f"HTTP error during check_authentication: {e}"
            ) from e

        if response.status_code != 200:
            logfire.error(
                "Steam check_authentication failed",
                status_code=response.status_code,
            )
            raise UpstreamUnavailableError(
                f"check_authentication failed: {response.status_code}"
            )

        fields = _parse_key_value_form(response.text)
        return fields.get("is_valid") == "true"


def _parse_key_value_form(body: str) -> dict[str, str]:
    """Parse an OpenID key-value form (``key:value`` per line)."""
    fields = {}
    for line in body.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            fields[key.strip()] = value.strip()
    return fields


def relay_message_from_callback(params: Mapping[str, str]) -> RelayMessage:
    """Turn a callback query into the message relayed to the sign-in initiator.

    Args:
        params: Callback query parameters

    Returns:
        A success message with the Steam ID and raw assertion, or an error
        message carrying a short reason
    """
    try:
        identity = parse_callback(params)
    except CallbackError as e:
        logfire.info("Steam callback rejected", reason=str(e))
        return RelayMessage(type=RelayMessageType.ERROR, error=str(e))

    assertion = {k: v for k, v in params.items() if k.startswith("openid.")}
    return RelayMessage(
        type=RelayMessageType.SUCCESS,
        steam_id=identity.steam_id.root,
        ticket=identity.nonce,
        assertion=assertion,
    )
