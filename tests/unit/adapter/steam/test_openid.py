"""Tests for Steam OpenID URL building and callback parsing."""

from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from leaderboard.adapter.steam.openid import (
    CANCELLED_MESSAGE,
    IDENTIFIER_SELECT,
    OPENID_NS,
    AuthCancelledError,
    MalformedResponseError,
    SteamOpenIDVerifier,
    build_auth_url,
    parse_callback,
    realm_for,
    relay_message_from_callback,
)
from leaderboard.domain.error import UpstreamUnavailableError
from leaderboard.domain.value import RelayMessageType, SteamId

IDENTITY = "https://steamcommunity.com/openid/id/76561198000000001"


def _callback(**overrides: str) -> dict[str, str]:
    params = {
        "openid.ns": OPENID_NS,
        "openid.mode": "id_res",
        "openid.op_endpoint": "https://steamcommunity.com/openid/login",
        "openid.claimed_id": IDENTITY,
        "openid.identity": IDENTITY,
        "openid.return_to": "https://example.com/steam-callback",
        "openid.response_nonce": "2026-10-17T10:00:00Zabc",
        "openid.assoc_handle": "1234567890",
        "openid.signed": "signed,op_endpoint,claimed_id,identity",
        "openid.sig": "c2lnbmF0dXJl",
    }
    params.update(overrides)
    return params


class TestRealm:
    """Tests for realm_for()."""

    def test_realm_drops_path(self):
        """Should keep only scheme and host."""
        assert realm_for("https://example.com/callback") == "https://example.com"

    def test_realm_keeps_explicit_port(self):
        """Should keep an explicit port (loopback callbacks)."""
        assert (
            realm_for("http://127.0.0.1:8765/steam-callback")
            == "http://127.0.0.1:8765"
        )

    def test_relative_url_rejected(self):
        """Should reject a URL without scheme or host."""
        with pytest.raises(ValueError):
            realm_for("/steam-callback")


class TestBuildAuthUrl:
    """Tests for build_auth_url()."""

    def test_contains_openid_parameters(self):
        """Should encode every checkid_setup parameter."""
        url = build_auth_url("https://example.com/steam-callback")

        parts = urlsplit(url)
        query = {k: v[0] for k, v in parse_qs(parts.query).items()}

        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == (
            "https://steamcommunity.com/openid/login"
        )
        assert query == {
            "openid.ns": OPENID_NS,
            "openid.mode": "checkid_setup",
            "openid.return_to": "https://example.com/steam-callback",
            "openid.realm": "https://example.com",
            "openid.identity": IDENTIFIER_SELECT,
            "openid.claimed_id": IDENTIFIER_SELECT,
        }

    def test_custom_endpoint(self):
        """Should target the configured endpoint."""
        url = build_auth_url(
            "https://example.com/cb", endpoint="https://openid.example.test/login"
        )
        assert url.startswith("https://openid.example.test/login?")


class TestParseCallback:
    """Tests for parse_callback()."""

    def test_success_extracts_steam_id_and_nonce(self):
        """Should take the trailing digits of the identity URL."""
        identity = parse_callback(_callback())

        assert identity.steam_id == SteamId("76561198000000001")
        assert identity.nonce == "2026-10-17T10:00:00Zabc"

    def test_short_identity(self):
        """Should accept any run of digits."""
        identity = parse_callback(
            _callback(**{"openid.identity": "https://steamcommunity.com/openid/id/123456"})
        )
        assert identity.steam_id.root == "123456"

    def test_falls_back_to_claimed_id(self):
        """Should use claimed_id when identity is absent."""
        params = _callback()
        del params["openid.identity"]

        assert parse_callback(params).steam_id.root == "76561198000000001"

    def test_cancel(self):
        """Should report cancellation distinctly."""
        with pytest.raises(AuthCancelledError) as exc_info:
            parse_callback({"openid.mode": "cancel"})
        assert str(exc_info.value) == CANCELLED_MESSAGE

    def test_unknown_mode(self):
        """Should reject anything but id_res."""
        with pytest.raises(MalformedResponseError):
            parse_callback(_callback(**{"openid.mode": "error"}))

    def test_missing_mode(self):
        """Should reject a callback without a mode."""
        with pytest.raises(MalformedResponseError):
            parse_callback({})

    def test_identity_without_digits(self):
        """Should reject an identity URL that carries no Steam ID."""
        with pytest.raises(MalformedResponseError):
            parse_callback(
                _callback(
                    **{
                        "openid.identity": "https://steamcommunity.com/openid/id/abc",
                        "openid.claimed_id": "",
                    }
                )
            )

    @pytest.mark.parametrize(
        "identity",
        [
            "https://steamcommunity.com/openid/id/123456\n",
            "https://steamcommunity.com/openid/id/\u0661\u0662\u0663",
        ],
    )
    def test_identity_with_non_ascii_or_trailing_newline(self, identity):
        """Should accept only a plain ASCII digit ID at the end of the URL."""
        with pytest.raises(MalformedResponseError):
            parse_callback(
                _callback(**{"openid.identity": identity, "openid.claimed_id": ""})
            )


class TestRelayMessageFromCallback:
    """Tests for relay_message_from_callback()."""

    def test_success_carries_assertion(self):
        """Should relay the Steam ID and the raw openid fields."""
        params = {**_callback(), "utm_source": "ignored"}

        message = relay_message_from_callback(params)

        assert message.type is RelayMessageType.SUCCESS
        assert message.steam_id == "76561198000000001"
        assert message.ticket == "2026-10-17T10:00:00Zabc"
        assert message.assertion is not None
        assert "utm_source" not in message.assertion
        assert message.assertion["openid.sig"] == "c2lnbmF0dXJl"

    def test_cancel_becomes_error_message(self):
        """Should relay a cancellation as an error."""
        message = relay_message_from_callback({"openid.mode": "cancel"})

        assert message.type is RelayMessageType.ERROR
        assert message.error == CANCELLED_MESSAGE
        assert message.steam_id is None

    def test_wire_format(self):
        """Should serialize with browser field names."""
        wire = relay_message_from_callback(_callback()).to_wire()

        assert wire["type"] == "STEAM_AUTH_SUCCESS"
        assert wire["steamId"] == "76561198000000001"
        assert "steam_id" not in wire


class TestSteamOpenIDVerifier:
    """Tests for SteamOpenIDVerifier.check_authentication()."""

    @pytest.mark.asyncio
    async def test_valid_assertion(self):
        """Should post the signed fields back with check_authentication."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, text="ns:http://specs.openid.net/auth/2.0\nis_valid:true\n")

        verifier = SteamOpenIDVerifier(transport=httpx.MockTransport(handler))

        assert await verifier.check_authentication(_callback()) is True
        assert seen["form"]["openid.mode"] == ["check_authentication"]
        assert seen["form"]["openid.sig"] == ["c2lnbmF0dXJl"]

    @pytest.mark.asyncio
    async def test_invalid_assertion(self):
        """Should return False when Steam says is_valid:false."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text="is_valid:false\n")
        )
        verifier = SteamOpenIDVerifier(transport=transport)

        assert await verifier.check_authentication(_callback()) is False

    @pytest.mark.asyncio
    async def test_upstream_error(self):
        """Should raise UpstreamUnavailableError on a non-200 answer."""
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        verifier = SteamOpenIDVerifier(transport=transport)

        with pytest.raises(UpstreamUnavailableError):
            await verifier.check_authentication(_callback())

    @pytest.mark.asyncio
    async def test_network_error(self):
        """Should raise UpstreamUnavailableError when Steam is unreachable."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        verifier = SteamOpenIDVerifier(transport=httpx.MockTransport(handler))

        with pytest.raises(UpstreamUnavailableError):
            await verifier.check_authentication(_callback())
