"""Steam infrastructure providers."""

from dishka import Scope, provide

from leaderboard.adapter.steam import RealSteamClient, SteamOpenIDVerifier
from leaderboard.config import Settings
from leaderboard.domain.service import IdentityProviderClient
from leaderboard.util.di.base import ProviderBase
from leaderboard.util.error import ConfigurationError


class SteamProvider(ProviderBase):
    """Steam component base."""

    __mock_component__ = "steam"


class ProdSteamProvider(SteamProvider):
    """Production Steam provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_steam_client(self, settings: Settings) -> IdentityProviderClient:
        """Provide Steam Web API client.

        Raises:
            ConfigurationError: If no Steam Web API key is configured outside
                development and test
        """
        steam = settings.steam
        if settings.environment in ("staging", "production") and (
            not steam.api_key or steam.api_key == "CHANGE_ME_IN_PRODUCTION"
        ):
            raise ConfigurationError("STEAM__API_KEY must be configured")

        verifier = SteamOpenIDVerifier(
            endpoint=steam.openid_endpoint,
            timeout=steam.request_timeout_seconds,
        )
        return RealSteamClient(
            api_key=steam.api_key,
            profile_api_url=steam.profile_api_url,
            verifier=verifier,
            timeout=steam.request_timeout_seconds,
        )
