"""Authentication domain service."""

from collections.abc import Mapping

import logfire

from leaderboard.domain.error import InvalidRequestError
from leaderboard.domain.value import SteamId, SteamProfile

from .base import Service


class IdentityProviderClient:
    """Server-to-server interface to the identity provider.

    Implementations raise ``UpstreamUnavailableError`` when the provider
    cannot be reached or answers with a non-2xx status, and
    ``ProfileNotFoundError`` when it has no profile for the ID.
    """

    async def fetch_profile(self, steam_id: SteamId) -> SteamProfile:
        """Fetch the canonical profile for a Steam ID.

        Args:
            steam_id: Steam ID claimed by the client

        Returns:
            Profile as reported by the provider
        """
        raise NotImplementedError

    async def check_authentication(self, assertion: Mapping[str, str]) -> bool:
        """Ask the provider whether a signed OpenID assertion is genuine.

        Args:
            assertion: Raw ``openid.*`` callback parameters

        Returns:
            True if the provider confirms the signature
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service wrapping the identity provider.

    The server-side profile fetch is the trust anchor for sign-in: profile
    fields supplied by the browser are never used.
    """

    def __init__(self, identity_client: IdentityProviderClient) -> None:
        """Initialize auth service.

        Args:
            identity_client: Provider client implementation
        """
        self.identity_client = identity_client

    async def fetch_profile(self, steam_id: SteamId) -> SteamProfile:
        """Fetch the canonical Steam profile.

        Raises:
            UpstreamUnavailableError: If Steam is unreachable or errors
            ProfileNotFoundError: If Steam has no profile for the ID
        """
        with logfire.span("auth_service.fetch_profile", steam_id=steam_id.root):
            profile = await self.identity_client.fetch_profile(steam_id)
            logfire.info(
                "Steam profile fetched",
                steam_id=steam_id.root,
                username=profile.username,
            )
            return profile

    async def verify_assertion(
        self, steam_id: SteamId, assertion: Mapping[str, str], claimed: SteamId
    ) -> None:
        """Verify a relayed OpenID assertion belongs to ``steam_id`` and is signed.

        Args:
            steam_id: Steam ID the caller asks to sign in as
            assertion: Raw callback parameters relayed by the browser
            claimed: Steam ID parsed out of ``assertion``

        Raises:
            InvalidRequestError: If the assertion names another account or
                the provider rejects it
            UpstreamUnavailableError: If the provider cannot be reached
        """
        with logfire.span("auth_service.verify_assertion", steam_id=steam_id.root):
            if claimed != steam_id:
                logfire.warn(
                    "Assertion identity mismatch",
                    steam_id=steam_id.root,
                    claimed=claimed.root,
                )
                raise InvalidRequestError("Assertion does not match Steam ID")

            if not await self.identity_client.check_authentication(assertion):
                logfire.warn("Assertion rejected by Steam", steam_id=steam_id.root)
                raise InvalidRequestError("Steam rejected the assertion")

            logfire.info("Assertion verified", steam_id=steam_id.root)
