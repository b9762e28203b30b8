"""Steam Web API client.

Fetches the canonical player profile with ``ISteamUser/GetPlayerSummaries``
and, when enabled, re-checks OpenID assertions with Steam.
"""

from collections.abc import Mapping

import httpx
import logfire

from leaderboard.adapter.steam.openid import SteamOpenIDVerifier
from leaderboard.domain.error import ProfileNotFoundError, UpstreamUnavailableError
from leaderboard.domain.service.auth_service import IdentityProviderClient
from leaderboard.domain.value import SteamId, SteamProfile


class SteamClient(IdentityProviderClient):
    """Base class for Steam clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealSteamClient(SteamClient):
    """Steam Web API client backed by httpx."""

    def __init__(
        self,
        api_key: str,
        profile_api_url: str,
        verifier: SteamOpenIDVerifier,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Steam client.

        Args:
            api_key: Steam Web API key
            profile_api_url: GetPlayerSummaries endpoint
            verifier: OpenID assertion verifier
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.api_key = api_key
        self.profile_api_url = profile_api_url
        self.verifier = verifier
        self.timeout = timeout
        self._transport = transport

    async def fetch_profile(self, steam_id: SteamId) -> SteamProfile:
        """Fetch a player summary from the Steam Web API.

        Raises:
            UpstreamUnavailableError: Network error, timeout, non-2xx or
                an unreadable body
            ProfileNotFoundError: If Steam returns no player for the ID
        """
        params = {"key": self.api_key, "steamids": steam_id.root}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(self.profile_api_url, params=params)
        except httpx.TimeoutException as e:
            logfire.error("Steam profile request timed out", steam_id=steam_id.root)
            raise UpstreamUnavailableError(f"Steam API timed out: {e}") from e
        except httpx.HTTPError as e:
            logfire.error(
                "Steam profile HTTP error", steam_id=steam_id.root, error=str(e)
            )
            raise UpstreamUnavailableError(f"HTTP error fetching profile: {e}") from e

        if not response.is_success:
            logfire.error(
                "Steam profile request failed",
                steam_id=steam_id.root,
                status_code=response.status_code,
            )
            raise UpstreamUnavailableError(
                f"Steam API request failed: {response.status_code}"
            )

        try:
            players = response.json()["response"].get("players") or []
        except (ValueError, KeyError, AttributeError) as e:
            logfire.error("Steam profile response unreadable", steam_id=steam_id.root)
            raise UpstreamUnavailableError("Unexpected Steam API response") from e

        if not players:
            logfire.warn("Steam profile not found", steam_id=steam_id.root)
            raise ProfileNotFoundError(f"No Steam player for {steam_id.root}")

        player = players[0]
        return SteamProfile(
            steam_id=steam_id,
            username=player.get("personaname") or steam_id.root,
            avatar_url=player.get("avatarfull"),
            profile_url=player.get("profileurl"),
            real_name=player.get("realname"),
        )

    async def check_authentication(self, assertion: Mapping[str, str]) -> bool:
        """Verify an OpenID assertion with Steam."""
        return await self.verifier.check_authentication(assertion)


class MockSteamClient(SteamClient):
    """Mock Steam client for testing.

    Returns deterministic profiles without making real API calls. Profiles can
    be registered per Steam ID; unknown IDs get a generated profile unless
    marked missing.
    """

    def __init__(self) -> None:
        """Initialize mock client without real Steam configuration."""
        self.profiles: dict[str, SteamProfile] = {}
        self.missing: set[str] = set()
        self.fail_next: Exception | None = None
        self.assertion_valid = True
        self.calls: list[str] = []

    def register(self, profile: SteamProfile) -> None:
        """Register the profile returned for ``profile.steam_id``."""
        self.profiles[profile.steam_id.root] = profile

    async def fetch_profile(self, steam_id: SteamId) -> SteamProfile:
        """Return the registered or a generated profile."""
        self.calls.append(steam_id.root)

        if self.fail_next is not None:
            error, self.fail_next = self.fail_next, None
            raise error

        if steam_id.root in self.missing:
            raise ProfileNotFoundError(f"No Steam player for {steam_id.root}")

        profile = self.profiles.get(steam_id.root)
        if profile is None:
            profile = SteamProfile(
                steam_id=steam_id,
                username=f"player_{steam_id.root}",
                avatar_url=f"https://avatars.example.com/{steam_id.root}.jpg",
                profile_url=f"https://steamcommunity.com/profiles/{steam_id.root}/",
            )
        return profile

    async def check_authentication(self, assertion: Mapping[str, str]) -> bool:
        """Return the configured verdict."""
        return self.assertion_valid
