"""Unit tests for SessionService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from leaderboard.config import AuthSettings
from leaderboard.domain.error import SessionExpiredError, SessionNotFoundError
from leaderboard.domain.model import Session
from leaderboard.domain.service import SessionService, generate_session_token
from leaderboard.domain.value import SessionToken, UserId
from leaderboard.persistence.repository.inmemory import InMemorySessionRepository


def _service(ttl_days: int = 30) -> tuple[SessionService, InMemorySessionRepository]:
    repo = InMemorySessionRepository()
    return SessionService(repo, AuthSettings(session_ttl_days=ttl_days)), repo


class TestGenerateSessionToken:
    """Tests for generate_session_token()."""

    def test_tokens_are_unique_and_long(self):
        """Should produce distinct url-safe tokens of 256 bits."""
        tokens = {generate_session_token().root for _ in range(100)}

        assert len(tokens) == 100
        assert all(len(t) >= 43 for t in tokens)


class TestIssue:
    """Tests for SessionService.issue()."""

    @pytest.mark.asyncio
    async def test_issue_sets_expiry_from_ttl(self):
        """Should expire the session after the configured TTL."""
        service, _ = _service(ttl_days=7)

        session = await service.issue(UserId(uuid4()))

        assert session.is_active
        assert session.expires_at - session.created_at == timedelta(days=7)

    @pytest.mark.asyncio
    async def test_issue_deactivates_previous_sessions(self):
        """Should leave exactly one active session per user."""
        service, repo = _service()
        user_id = UserId(uuid4())

        first = await service.issue(user_id)
        second = await service.issue(user_id)

        stored_first = await repo.find_by_token(first.token)
        assert stored_first is not None
        assert not stored_first.is_active
        assert (await repo.find_by_token(second.token)).is_active
        assert first.token != second.token

    @pytest.mark.asyncio
    async def test_issue_leaves_other_users_alone(self):
        """Should not touch sessions of other users."""
        service, repo = _service()

        other = await service.issue(UserId(uuid4()))
        await service.issue(UserId(uuid4()))

        assert (await repo.find_by_token(other.token)).is_active


class TestVerify:
    """Tests for SessionService.verify()."""

    @pytest.mark.asyncio
    async def test_verify_active_session(self):
        """Should return an active unexpired session."""
        service, _ = _service()
        user_id = UserId(uuid4())
        session = await service.issue(user_id)

        verified = await service.verify(session.token)

        assert verified.user_id == user_id

    @pytest.mark.asyncio
    async def test_unknown_token(self):
        """Should raise SessionNotFoundError for unknown tokens."""
        service, _ = _service()

        with pytest.raises(SessionNotFoundError):
            await service.verify(SessionToken("nope"))

    @pytest.mark.asyncio
    async def test_expired_session(self):
        """Should raise SessionExpiredError once expires_at has passed."""
        service, repo = _service()
        now = datetime.now(timezone.utc)
        token = SessionToken("expired-token")
        await repo.insert(
            Session(
                token=token,
                user_id=UserId(uuid4()),
                created_at=now - timedelta(days=31),
                expires_at=now - timedelta(seconds=1),
            )
        )

        with pytest.raises(SessionExpiredError):
            await service.verify(token)

    @pytest.mark.asyncio
    async def test_revoked_session(self):
        """Should raise SessionExpiredError after logout."""
        service, _ = _service()
        session = await service.issue(UserId(uuid4()))
        await service.revoke(session.token)

        with pytest.raises(SessionExpiredError):
            await service.verify(session.token)


class TestRevokeAndPurge:
    """Tests for SessionService.revoke() and purge_expired()."""

    @pytest.mark.asyncio
    async def test_revoke_is_idempotent(self):
        """Should report True only the first time."""
        service, _ = _service()
        session = await service.issue(UserId(uuid4()))

        assert await service.revoke(session.token) is True
        assert await service.revoke(session.token) is False

    @pytest.mark.asyncio
    async def test_revoke_unknown_token(self):
        """Should report False for unknown tokens."""
        service, _ = _service()

        assert await service.revoke(SessionToken("unknown")) is False

    @pytest.mark.asyncio
    async def test_purge_removes_only_expired(self):
        """Should delete expired sessions and keep live ones."""
        service, repo = _service()
        now = datetime.now(timezone.utc)
        await repo.insert(
            Session(
                token=SessionToken("old"),
                user_id=UserId(uuid4()),
                created_at=now - timedelta(days=40),
                expires_at=now - timedelta(days=10),
            )
        )
        live = await service.issue(UserId(uuid4()))

        removed = await service.purge_expired()

        assert removed == 1
        assert await repo.find_by_token(SessionToken("old")) is None
        assert await repo.find_by_token(live.token) is not None
