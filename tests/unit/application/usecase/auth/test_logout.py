"""Unit tests for LogoutUseCase."""

from dishka import AsyncContainer
import pytest

from leaderboard.application.usecase.auth import (
    ExchangeSessionUseCase,
    LogoutUseCase,
    VerifySessionUseCase,
)
from leaderboard.application.usecase.auth.exchange_session import (
    ExchangeSessionRequest,
)
from leaderboard.application.usecase.auth.logout import LogoutRequest
from leaderboard.application.usecase.auth.verify_session import VerifySessionRequest
from leaderboard.domain.error import InvalidRequestError, SessionExpiredError
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestLogoutUseCase:
    """Tests for LogoutUseCase."""

    @pytest.mark.asyncio
    async def test_logout_deactivates_session(self, unit_env: AsyncContainer):
        """Should make the token unusable."""
        exchange = await unit_env.get(ExchangeSessionUseCase)
        logout = await unit_env.get(LogoutUseCase)
        verify = await unit_env.get(VerifySessionUseCase)
        signed_in = await exchange.execute(ExchangeSessionRequest(external_id="42"))

        response = await logout.execute(
            LogoutRequest(session_token=signed_in.session_token)
        )

        assert response.revoked is True
        with pytest.raises(SessionExpiredError):
            await verify.execute(
                VerifySessionRequest(session_token=signed_in.session_token)
            )

    @pytest.mark.asyncio
    async def test_logout_twice(self, unit_env: AsyncContainer):
        """Should be a no-op the second time."""
        exchange = await unit_env.get(ExchangeSessionUseCase)
        logout = await unit_env.get(LogoutUseCase)
        signed_in = await exchange.execute(ExchangeSessionRequest(external_id="42"))
        request = LogoutRequest(session_token=signed_in.session_token)

        await logout.execute(request)
        response = await logout.execute(request)

        assert response.revoked is False

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env: AsyncContainer):
        """Should not fail for unknown or malformed tokens."""
        logout = await unit_env.get(LogoutUseCase)

        assert (await logout.execute(LogoutRequest(session_token="nope"))).revoked is False
        assert (
            await logout.execute(LogoutRequest(session_token="x" * 300))
        ).revoked is False

    @pytest.mark.asyncio
    async def test_missing_token(self, unit_env: AsyncContainer):
        """Should reject a request without a token."""
        logout = await unit_env.get(LogoutUseCase)

        with pytest.raises(InvalidRequestError):
            await logout.execute(LogoutRequest())
