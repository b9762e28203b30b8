"""HTTP client for the session API."""

from collections.abc import Mapping
from typing import Any

import httpx
import logfire
from pydantic import ValidationError

from leaderboard.client.errors import SessionApiError
from leaderboard.client.models import ClientUser, StoredSession


class SessionApiClient:
    """Calls ``POST /auth``, ``/auth/verify`` and ``/auth/logout``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize session API client.

        Args:
            base_url: API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def exchange(
        self,
        steam_id: str,
        assertion: Mapping[str, str] | None = None,
    ) -> StoredSession:
        """Exchange a relayed Steam ID for a session.

        Raises:
            SessionApiError: If the API refuses or cannot be reached
        """
        body: dict[str, Any] = {"externalId": steam_id}
        if assertion:
            body["assertion"] = dict(assertion)

        data = await self._post("/auth", body)
        try:
            return StoredSession(
                session_token=data["sessionToken"],
                user=ClientUser.model_validate(data["user"]),
            )
        except (KeyError, ValidationError) as e:
            raise _malformed("/auth", e) from e

    async def verify(self, session_token: str) -> ClientUser:
        """Resolve a token to its user.

        Raises:
            SessionApiError: If the token is not valid or the API is unreachable
        """
        data = await self._post("/auth/verify", {"sessionToken": session_token})
        try:
            return ClientUser.model_validate(data["user"])
        except (KeyError, ValidationError) as e:
            raise _malformed("/auth/verify", e) from e

    async def logout(self, session_token: str) -> None:
        """Deactivate a session on the server."""
        await self._post("/auth/logout", {"sessionToken": session_token})

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(path, json=body)
        except httpx.HTTPError as e:
            logfire.warn("Session API unreachable", path=path, error=str(e))
            raise SessionApiError(f"Session API unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.is_success or not data.get("success"):
            error = data.get("error") or f"HTTP {response.status_code}"
            logfire.info(
                "Session API refused request",
                path=path,
                status_code=response.status_code,
                error=error,
            )
            raise SessionApiError(error, status_code=response.status_code)

        return data


def _malformed(path: str, error: Exception) -> SessionApiError:
    logfire.warn("Session API returned a malformed body", path=path, error=str(error))
    return SessionApiError(f"Malformed response from {path}")
