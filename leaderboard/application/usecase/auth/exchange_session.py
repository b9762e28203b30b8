"""Exchange a Steam identity for a session token."""

import logfire
from pydantic import BaseModel

from leaderboard.adapter.steam.openid import CallbackError, parse_callback
from leaderboard.config import Settings
from leaderboard.domain.error import InvalidRequestError
from leaderboard.domain.service import AuthService, SessionService, UserService
from leaderboard.domain.value import SteamId

from ..base import BaseUseCase
from .views import UserView


class ExchangeSessionRequest(BaseModel):
    """Identity relayed by the browser after Steam sign-in."""

    external_id: str
    # Raw openid.* callback parameters; required when assertion checks are on
    assertion: dict[str, str] | None = None


class ExchangeSessionResponse(BaseModel):
    """Signed-in user and their new bearer token."""

    user: UserView
    session_token: str


class ExchangeSessionUseCase(BaseUseCase):
    """Use case for turning an asserted Steam ID into a session.

    The Steam ID from the browser is only a claim; the profile is always
    re-fetched server-side and, when ``steam.verify_assertion`` is set, the
    signed assertion is checked with Steam first.
    """

    def __init__(
        self,
        auth_service: AuthService,
        user_service: UserService,
        session_service: SessionService,
        settings: Settings,
    ) -> None:
        """Initialize exchange use case.

        Args:
            auth_service: Steam identity domain service
            user_service: User domain service
            session_service: Session domain service
            settings: Application settings
        """
        self.auth_service = auth_service
        self.user_service = user_service
        self.session_service = session_service
        self.settings = settings

    async def execute(self, request: ExchangeSessionRequest) -> ExchangeSessionResponse:
        """Execute the exchange.

        Steps:
        1. Validate the Steam ID
        2. Optionally verify the relayed assertion with Steam
        3. Fetch the canonical profile
        4. Upsert the user keyed by Steam ID
        5. Replace the user's sessions with a fresh one

        Raises:
            InvalidRequestError: Missing or malformed ID, or rejected assertion
            UpstreamUnavailableError: Steam unreachable or erroring
            ProfileNotFoundError: Steam has no profile for the ID
            StorageError: Persistence failure
        """
        with logfire.span("exchange_session.execute"):
            if not request.external_id:
                raise InvalidRequestError("Steam ID is required")
            try:
                steam_id = SteamId(request.external_id)
            except ValueError as e:
                raise InvalidRequestError("Steam ID must be numeric") from e

            if self.settings.steam.verify_assertion:
                await self._verify_assertion(steam_id, request.assertion)

            profile = await self.auth_service.fetch_profile(steam_id)
            user = await self.user_service.record_login(profile)
            session = await self.session_service.issue(user.id)

            logfire.info(
                "Session exchanged",
                user_id=str(user.id),
                steam_id=steam_id.root,
            )

            return ExchangeSessionResponse(
                user=UserView.from_user(user),
                session_token=session.token.root,
            )

    async def _verify_assertion(
        self, steam_id: SteamId, assertion: dict[str, str] | None
    ) -> None:
        if not assertion:
            raise InvalidRequestError("OpenID assertion is required")
        try:
            identity = parse_callback(assertion)
        except CallbackError as e:
            raise InvalidRequestError(f"Invalid OpenID assertion: {e}") from e

        await self.auth_service.verify_assertion(
            steam_id, assertion, claimed=identity.steam_id
        )
