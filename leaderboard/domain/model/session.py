"""Session entity."""

from datetime import datetime

from leaderboard.domain.model.common import DomainModel
from leaderboard.domain.value import SessionToken, UserId


class Session(DomainModel):
    """Bearer credential bound to a user.

    A session is usable only while ``is_active`` is set and the current time
    is strictly before ``expires_at``. Tokens are never rewritten.
    """

    token: SessionToken
    user_id: UserId
    created_at: datetime
    expires_at: datetime
    is_active: bool = True

    def is_valid_at(self, now: datetime) -> bool:
        """Check whether the session can authenticate a request at ``now``."""
        return self.is_active and now < self.expires_at
