"""Client-side owner of the signed-in session."""

from collections.abc import Callable

import logfire

from leaderboard.adapter.steam.openid import (
    CANCELLED_MESSAGE,
    STEAM_OPENID_ENDPOINT,
    build_auth_url,
)
from leaderboard.client.api import SessionApiClient
from leaderboard.client.cache import TokenCache
from leaderboard.client.errors import (
    PopupBlockedError,
    SessionApiError,
    SignInError,
    SignInInProgressError,
    SignInReason,
)
from leaderboard.client.models import ClientUser, StoredSession
from leaderboard.client.relay import RelayChannel, RelayResult


class ClientSessionManager:
    """Restores, establishes and ends the session of one client.

    At most one sign-in runs at a time; a second ``sign_in`` while one is
    pending is rejected with ``SignInInProgressError``.
    """

    def __init__(
        self,
        api: SessionApiClient,
        cache: TokenCache,
        relay_factory: Callable[[], RelayChannel],
        return_url: str,
        openid_endpoint: str = STEAM_OPENID_ENDPOINT,
    ) -> None:
        """Initialize session manager.

        Args:
            api: Session API client
            cache: Local token cache
            relay_factory: Builds a fresh relay channel per attempt
            return_url: Callback URL Steam redirects to
            openid_endpoint: Steam OpenID endpoint
        """
        self.api = api
        self.cache = cache
        self.relay_factory = relay_factory
        self.return_url = return_url
        self.openid_endpoint = openid_endpoint

        self._session: StoredSession | None = None
        self._signing_in = False

    @property
    def user(self) -> ClientUser | None:
        return self._session.user if self._session else None

    @property
    def session_token(self) -> str | None:
        return self._session.session_token if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    async def restore(self) -> ClientUser | None:
        """Re-validate a cached session with the server.

        Any failure drops the cached session without surfacing an error.

        Returns:
            The refreshed user, or None when signed out
        """
        cached = self.cache.load()
        if cached is None:
            self._session = None
            return None

        with logfire.span("session_manager.restore"):
            try:
                user = await self.api.verify(cached.session_token)
            except SessionApiError as e:
                logfire.info("Cached session rejected", error=str(e))
                self._purge()
                return None

            self._session = StoredSession(
                session_token=cached.session_token, user=user
            )
            self.cache.save(self._session)
            return user

    async def sign_in(self) -> ClientUser:
        """Run the Steam sign-in and exchange the result for a session.

        Raises:
            SignInInProgressError: If a sign-in is already pending
            SignInError: With the reason the attempt failed
        """
        if self._signing_in:
            raise SignInInProgressError("A sign-in is already in progress")
        self._signing_in = True

        try:
            with logfire.span("session_manager.sign_in"):
                auth_url = build_auth_url(
                    self.return_url, endpoint=self.openid_endpoint
                )

                try:
                    result = await self.relay_factory().run(auth_url)
                except PopupBlockedError as e:
                    raise SignInError(SignInReason.POPUP_BLOCKED, str(e)) from e

                if not result.succeeded:
                    raise SignInError(_failure_reason(result), result.error)

                try:
                    session = await self.api.exchange(
                        result.steam_id.root, assertion=result.assertion
                    )
                except SessionApiError as e:
                    reason = (
                        SignInReason.SERVICE_UNAVAILABLE
                        if e.is_unavailable
                        else SignInReason.UNKNOWN
                    )
                    raise SignInError(reason, str(e)) from e

                self._session = session
                self.cache.save(session)
                logfire.info("Signed in", username=session.user.username)
                return session.user
        finally:
            self._signing_in = False

    async def sign_out(self) -> None:
        """Forget the session locally, then tell the server (best effort)."""
        token = self.session_token or _cached_token(self.cache)
        self._purge()

        if token is None:
            return
        try:
            await self.api.logout(token)
        except SessionApiError as e:
            logfire.warn("Server logout failed", error=str(e))

    def _purge(self) -> None:
        self._session = None
        self.cache.clear()


def _failure_reason(result: RelayResult) -> SignInReason:
    if result.closed_by_user or result.error == CANCELLED_MESSAGE:
        return SignInReason.CANCELLED
    return SignInReason.UNKNOWN


def _cached_token(cache: TokenCache) -> str | None:
    cached = cache.load()
    return cached.session_token if cached else None
