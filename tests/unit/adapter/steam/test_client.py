"""Tests for the Steam Web API client."""

import httpx
import pytest

from leaderboard.adapter.steam import MockSteamClient, RealSteamClient, SteamOpenIDVerifier
from leaderboard.domain.error import ProfileNotFoundError, UpstreamUnavailableError
from leaderboard.domain.value import SteamId
from tests.factories import make_profile

API_URL = "https://api.steampowered.com/ISteamUser/GetPlayerSummaries/v0002/"


def _client(handler) -> RealSteamClient:
    return RealSteamClient(
        api_key="test-key",
        profile_api_url=API_URL,
        verifier=SteamOpenIDVerifier(),
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


class TestRealSteamClient:
    """Tests for RealSteamClient.fetch_profile()."""

    @pytest.mark.asyncio
    async def test_maps_player_summary(self):
        """Should map the first player to a profile."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            return httpx.Response(
                200,
                json={
                    "response": {
                        "players": [
                            {
                                "steamid": "123456",
                                "personaname": "Alice",
                                "avatarfull": "https://avatars.example.com/a.jpg",
                                "profileurl": "https://steamcommunity.com/id/alice/",
                                "realname": "Alice A.",
                            }
                        ]
                    }
                },
            )

        profile = await _client(handler).fetch_profile(SteamId("123456"))

        assert seen["params"] == {"key": "test-key", "steamids": "123456"}
        assert profile.steam_id == SteamId("123456")
        assert profile.username == "Alice"
        assert profile.avatar_url == "https://avatars.example.com/a.jpg"
        assert profile.profile_url == "https://steamcommunity.com/id/alice/"
        assert profile.real_name == "Alice A."

    @pytest.mark.asyncio
    async def test_missing_persona_name_falls_back_to_id(self):
        """Should use the Steam ID as username when none is given."""
        transport_response = {"response": {"players": [{"steamid": "123456"}]}}

        profile = await _client(
            lambda request: httpx.Response(200, json=transport_response)
        ).fetch_profile(SteamId("123456"))

        assert profile.username == "123456"
        assert profile.avatar_url is None

    @pytest.mark.asyncio
    async def test_empty_players(self):
        """Should raise ProfileNotFoundError when Steam knows no player."""
        client = _client(
            lambda request: httpx.Response(200, json={"response": {"players": []}})
        )

        with pytest.raises(ProfileNotFoundError):
            await client.fetch_profile(SteamId("123456"))

    @pytest.mark.asyncio
    async def test_non_success_status(self):
        """Should raise UpstreamUnavailableError on a 5xx."""
        client = _client(lambda request: httpx.Response(500))

        with pytest.raises(UpstreamUnavailableError):
            await client.fetch_profile(SteamId("123456"))

    @pytest.mark.asyncio
    async def test_forbidden_key(self):
        """Should raise UpstreamUnavailableError when the key is rejected."""
        client = _client(lambda request: httpx.Response(403, text="Forbidden"))

        with pytest.raises(UpstreamUnavailableError):
            await client.fetch_profile(SteamId("123456"))

    @pytest.mark.asyncio
    async def test_unreadable_body(self):
        """Should raise UpstreamUnavailableError on a non-JSON body."""
        client = _client(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(UpstreamUnavailableError):
            await client.fetch_profile(SteamId("123456"))

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Should raise UpstreamUnavailableError on timeout."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UpstreamUnavailableError):
            await _client(handler).fetch_profile(SteamId("123456"))


class TestMockSteamClient:
    """Tests for MockSteamClient."""

    @pytest.mark.asyncio
    async def test_registered_profile(self):
        """Should return the registered profile."""
        client = MockSteamClient()
        client.register(make_profile("123456", "Alice"))

        profile = await client.fetch_profile(SteamId("123456"))

        assert profile.username == "Alice"
        assert client.calls == ["123456"]

    @pytest.mark.asyncio
    async def test_generated_profile(self):
        """Should generate a profile for unknown IDs."""
        profile = await MockSteamClient().fetch_profile(SteamId("42"))

        assert profile.username == "player_42"

    @pytest.mark.asyncio
    async def test_fail_next_raises_once(self):
        """Should raise the injected error once."""
        client = MockSteamClient()
        client.fail_next = UpstreamUnavailableError()

        with pytest.raises(UpstreamUnavailableError):
            await client.fetch_profile(SteamId("42"))

        assert (await client.fetch_profile(SteamId("42"))).username == "player_42"
