"""Logout use case."""

from pydantic import BaseModel

from leaderboard.domain.error import InvalidRequestError
from leaderboard.domain.service import SessionService
from leaderboard.domain.value import SessionToken

from ..base import BaseUseCase


class LogoutRequest(BaseModel):
    """Logout request."""

    session_token: str | None = None


class LogoutResponse(BaseModel):
    """Logout response."""

    revoked: bool


class LogoutUseCase(BaseUseCase):
    """Use case for deactivating a session. Unknown tokens are a no-op."""

    def __init__(self, session_service: SessionService) -> None:
        self.session_service = session_service

    async def execute(self, request: LogoutRequest) -> LogoutResponse:
        """Deactivate the presented session.

        Raises:
            InvalidRequestError: If no token was presented
        """
        if not request.session_token:
            raise InvalidRequestError("No session token provided")

        try:
            token = SessionToken(request.session_token)
        except ValueError:
            return LogoutResponse(revoked=False)

        revoked = await self.session_service.revoke(token)
        return LogoutResponse(revoked=revoked)
