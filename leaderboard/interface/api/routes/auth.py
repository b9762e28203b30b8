"""Authentication routes.

Steam sign-in is finished by exchanging the Steam ID relayed from the
callback page for an opaque session token.
"""

import logging
from typing import Annotated

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from leaderboard.adapter.steam.openid import build_auth_url
from leaderboard.application.usecase.auth import (
    ExchangeSessionUseCase,
    LogoutUseCase,
    VerifySessionUseCase,
)
from leaderboard.application.usecase.auth.exchange_session import (
    ExchangeSessionRequest,
)
from leaderboard.application.usecase.auth.logout import LogoutRequest
from leaderboard.application.usecase.auth.verify_session import (
    VerifySessionRequest,
)
from leaderboard.config import Settings
from leaderboard.domain.error import InvalidRequestError
from leaderboard.interface.api.schemas import CamelModel, SuccessResponse, UserPayload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class ExchangeAPIRequest(CamelModel):
    """Body of ``POST /auth``."""

    external_id: str | None = None
    # Accepted for compatibility with clients that send the original field
    steam_id: str | None = None
    ticket: str | None = None
    assertion: dict[str, str] | None = None


class ExchangeAPIResponse(CamelModel):
    """Successful exchange."""

    success: bool = True
    user: UserPayload
    session_token: str


class SessionTokenAPIRequest(CamelModel):
    """Body carrying a session token."""

    session_token: str | None = None


class VerifyAPIResponse(CamelModel):
    """Successful verification."""

    success: bool = True
    user: UserPayload


class LoginUrlResponse(CamelModel):
    """Steam login URL for a callback."""

    authorization_url: str


@router.post("", response_model=ExchangeAPIResponse)
async def exchange_session(
    request: ExchangeAPIRequest,
    exchange_use_case: FromDishka[ExchangeSessionUseCase],
) -> ExchangeAPIResponse:
    """Exchange a Steam-asserted identity for a session token.

    Example:
        POST /auth
        {"externalId": "76561198000000000"}

        Response:
        {
            "success": true,
            "user": {"id": "...", "steamId": "76561198000000000", ...},
            "sessionToken": "..."
        }
    """
    external_id = request.external_id or request.steam_id or ""
    logger.info(f"Session exchange requested for steam_id={external_id}")

    result = await exchange_use_case.execute(
        ExchangeSessionRequest(external_id=external_id, assertion=request.assertion)
    )
    return ExchangeAPIResponse(
        user=UserPayload.from_view(result.user),
        session_token=result.session_token,
    )


@router.post("/verify", response_model=VerifyAPIResponse)
async def verify_session(
    request: SessionTokenAPIRequest,
    verify_use_case: FromDishka[VerifySessionUseCase],
) -> VerifyAPIResponse:
    """Resolve a session token to its user.

    Responds 400 without a token and 401 for unknown, revoked or expired ones.
    """
    result = await verify_use_case.execute(
        VerifySessionRequest(session_token=request.session_token)
    )
    return VerifyAPIResponse(user=UserPayload.from_view(result.user))


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    request: SessionTokenAPIRequest,
    logout_use_case: FromDishka[LogoutUseCase],
) -> SuccessResponse:
    """Deactivate a session. Unknown tokens succeed as a no-op."""
    result = await logout_use_case.execute(
        LogoutRequest(session_token=request.session_token)
    )
    logger.info(f"Logout processed: revoked={result.revoked}")
    return SuccessResponse()


@router.get("/steam/login-url", response_model=LoginUrlResponse)
async def steam_login_url(
    settings: FromDishka[Settings],
    return_url: Annotated[str | None, Query(alias="returnUrl")] = None,
) -> LoginUrlResponse:
    """Build the Steam OpenID login URL.

    Query:
        returnUrl: Callback URL Steam redirects to. Defaults to this API's
            ``/steam-callback`` page.
    """
    target = return_url or f"{settings.api.base_url}{settings.auth.callback_path}"
    try:
        url = build_auth_url(target, endpoint=settings.steam.openid_endpoint)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e
    return LoginUrlResponse(authorization_url=url)
