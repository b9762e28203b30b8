"""Mock Steam providers for testing."""

from dishka import Scope, from_context, provide

from leaderboard.adapter.steam import MockSteamClient
from leaderboard.domain.service import IdentityProviderClient
from leaderboard.util.di.infrastructure.steam import SteamProvider


class MockSteamProvider(SteamProvider):
    """Mock Steam provider using the in-process Steam client.

    The client instance comes from the container context so tests can
    register profiles and inject failures on it.
    """

    __is_mock__ = True

    mock_steam_client = from_context(provides=MockSteamClient, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_steam_client(self, client: MockSteamClient) -> IdentityProviderClient:
        """Provide mock Steam client."""
        return client
