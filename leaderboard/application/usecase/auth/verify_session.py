"""Verify session use case."""

import logfire
from pydantic import BaseModel

from leaderboard.domain.error import (
    InvalidRequestError,
    NotFoundError,
    SessionNotFoundError,
)
from leaderboard.domain.service import SessionService, UserService
from leaderboard.domain.value import SessionToken

from ..base import BaseUseCase
from .views import UserView


class VerifySessionRequest(BaseModel):
    """Verify session request."""

    session_token: str | None = None


class VerifySessionResponse(BaseModel):
    """Verify session response."""

    user: UserView


class VerifySessionUseCase(BaseUseCase):
    """Use case for resolving a bearer token to its user. Read-only."""

    def __init__(
        self, session_service: SessionService, user_service: UserService
    ) -> None:
        """Initialize verify session use case.

        Args:
            session_service: Session domain service
            user_service: User domain service
        """
        self.session_service = session_service
        self.user_service = user_service

    async def execute(self, request: VerifySessionRequest) -> VerifySessionResponse:
        """Execute verify session flow.

        Raises:
            InvalidRequestError: If no token was presented
            SessionNotFoundError: If the token or its user is unknown
            SessionExpiredError: If the session was deactivated or expired
        """
        if not request.session_token:
            raise InvalidRequestError("No session token provided")

        with logfire.span("verify_session.execute"):
            try:
                token = SessionToken(request.session_token)
            except ValueError as e:
                raise SessionNotFoundError() from e

            session = await self.session_service.verify(token)

            try:
                user = await self.user_service.get_by_id(session.user_id)
            except NotFoundError as e:
                raise SessionNotFoundError("Session user no longer exists") from e

            return VerifySessionResponse(user=UserView.from_user(user))
