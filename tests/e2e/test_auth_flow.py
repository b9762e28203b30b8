"""End-to-end tests for the Steam sign-in and session flow."""

from urllib.parse import parse_qs, urlsplit

from leaderboard.adapter.steam.openid import parse_callback, realm_for
from leaderboard.domain.error import UpstreamUnavailableError

IDENTITY = "https://steamcommunity.com/openid/id/123456"


def _callback_params(identity: str = IDENTITY) -> dict[str, str]:
    return {
        "openid.ns": "http://specs.openid.net/auth/2.0",
        "openid.mode": "id_res",
        "openid.claimed_id": identity,
        "openid.identity": identity,
        "openid.response_nonce": "2026-10-17T10:00:00Z0001",
        "openid.sig": "c2ln",
    }


class TestLoginUrl:
    """Tests for GET /auth/steam/login-url."""

    def test_default_return_url(self, client):
        """Should point Steam back at this API's callback page."""
        response = client.get("/auth/steam/login-url")

        assert response.status_code == 200
        url = response.json()["authorizationUrl"]
        query = parse_qs(urlsplit(url).query)
        assert query["openid.return_to"] == ["http://localhost:8000/steam-callback"]
        assert query["openid.realm"] == ["http://localhost:8000"]

    def test_custom_return_url(self, client):
        """Should derive the realm from the given return URL."""
        response = client.get(
            "/auth/steam/login-url",
            params={"returnUrl": "https://example.com/callback"},
        )

        query = parse_qs(urlsplit(response.json()["authorizationUrl"]).query)
        assert query["openid.realm"] == ["https://example.com"]

    def test_relative_return_url(self, client):
        """Should reject a relative return URL."""
        response = client.get("/auth/steam/login-url", params={"returnUrl": "/cb"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid request"}


class TestCallbackPage:
    """Tests for GET /steam-callback."""

    def test_success_page_relays_steam_id(self, client):
        """Should render a page posting the Steam ID to the opener."""
        response = client.get("/steam-callback", params=_callback_params())

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.headers["cache-control"] == "no-store"
        assert '"type": "STEAM_AUTH_SUCCESS"' in response.text
        assert '"steamId": "123456"' in response.text

    def test_callback_page_targets_frontend_origin(self, client):
        """Should post to the frontend that opened the popup, not the API origin."""
        login = client.get("/auth/steam/login-url").json()["authorizationUrl"]
        return_to = parse_qs(urlsplit(login).query)["openid.return_to"][0]
        assert return_to.startswith("http://localhost:8000/")

        response = client.get("/steam-callback", params=_callback_params())

        assert (
            'window.opener.postMessage(message, "http://localhost:3000")'
            in response.text
        )
        assert "window.location.origin" not in response.text

    def test_cancel_page_relays_error(self, client):
        """Should render a page posting the cancellation."""
        response = client.get("/steam-callback", params={"openid.mode": "cancel"})

        assert response.status_code == 200
        assert '"type": "STEAM_AUTH_ERROR"' in response.text
        assert "Authentication cancelled" in response.text


class TestSessionFlow:
    """Exchange, verify and logout against the running app."""

    def test_full_sign_in_scenario(self, client, steam, alice):
        """Should sign in, verify, and invalidate the first token on re-sign-in."""
        # Realm and callback parsing
        assert realm_for("https://example.com/callback") == "https://example.com"
        assert parse_callback(_callback_params()).steam_id.root == "123456"

        # Exchange creates the user from the Steam profile
        steam.register(alice)
        response = client.post("/auth", json={"externalId": "123456"})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user"]["steamId"] == "123456"
        assert body["user"]["username"] == "Alice"
        assert body["user"]["avatar"] == "https://avatars.example.com/123456.jpg"
        first_token = body["sessionToken"]

        # Verify returns the same user
        response = client.post("/auth/verify", json={"sessionToken": first_token})
        assert response.status_code == 200
        assert response.json()["user"]["username"] == "Alice"

        # Signing in again revokes the first token
        response = client.post("/auth", json={"externalId": "123456"})
        second_token = response.json()["sessionToken"]
        assert second_token != first_token

        response = client.post("/auth/verify", json={"sessionToken": first_token})
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid session"}

        response = client.post("/auth/verify", json={"sessionToken": second_token})
        assert response.status_code == 200

    def test_legacy_steam_id_field(self, client):
        """Should accept ``steamId`` in place of ``externalId``."""
        response = client.post("/auth", json={"steamId": "42", "ticket": "n"})

        assert response.status_code == 200
        assert response.json()["user"]["username"] == "player_42"

    def test_missing_steam_id(self, client):
        """Should answer 400 without an ID."""
        response = client.post("/auth", json={})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_non_numeric_steam_id(self, client, steam):
        """Should answer 400 and never call Steam."""
        response = client.post("/auth", json={"externalId": "not-a-number"})

        assert response.status_code == 400
        assert steam.calls == []

    def test_steam_unavailable(self, client, steam, store):
        """Should answer 502 and write nothing."""
        steam.fail_next = UpstreamUnavailableError("Steam API request failed: 503")

        response = client.post("/auth", json={"externalId": "123456"})

        assert response.status_code == 502
        assert response.json() == {
            "success": False,
            "error": "Steam API request failed",
        }
        assert store.users == {}
        assert store.sessions == {}

    def test_profile_not_found(self, client, steam):
        """Should answer 404 when Steam has no profile."""
        steam.missing.add("123456")

        response = client.post("/auth", json={"externalId": "123456"})

        assert response.status_code == 404
        assert response.json()["error"] == "Steam profile not found"

    def test_verify_without_token(self, client):
        """Should answer 400 when no token is sent."""
        response = client.post("/auth/verify", json={})

        assert response.status_code == 400

    def test_verify_unknown_token(self, client):
        """Should answer 401 for unknown tokens."""
        response = client.post("/auth/verify", json={"sessionToken": "nope"})

        assert response.status_code == 401

    def test_logout(self, client):
        """Should revoke the token and treat repeats as success."""
        token = client.post("/auth", json={"externalId": "42"}).json()["sessionToken"]

        first = client.post("/auth/logout", json={"sessionToken": token})
        second = client.post("/auth/logout", json={"sessionToken": token})

        assert first.json() == {"success": True}
        assert second.json() == {"success": True}
        verify = client.post("/auth/verify", json={"sessionToken": token})
        assert verify.status_code == 401

    def test_logout_without_token(self, client):
        """Should answer 400 when no token is sent."""
        response = client.post("/auth/logout", json={})

        assert response.status_code == 400

    def test_cors_preflight(self, client):
        """Should answer CORS preflight for the frontend origin."""
        response = client.options(
            "/auth",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert (
            response.headers["access-control-allow-origin"] == "http://localhost:3000"
        )


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        """Should report healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
