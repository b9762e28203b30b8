"""Local storage of the session token and user."""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path

import logfire

from leaderboard.client.models import StoredSession


class TokenCache(ABC):
    """Holds at most one stored session."""

    @abstractmethod
    def load(self) -> StoredSession | None:
        """Return the stored session, if any."""

    @abstractmethod
    def save(self, session: StoredSession) -> None:
        """Replace the stored session."""

    @abstractmethod
    def clear(self) -> None:
        """Forget the stored session."""


class InMemoryTokenCache(TokenCache):
    """Process-local cache."""

    def __init__(self, session: StoredSession | None = None) -> None:
        self._session = session

    def load(self) -> StoredSession | None:
        return self._session

    def save(self, session: StoredSession) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None


class FileTokenCache(TokenCache):
    """JSON file cache, readable only by the owner.

    An unreadable or corrupt file counts as empty and is removed.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> StoredSession | None:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        try:
            return StoredSession.model_validate(json.loads(raw))
        except ValueError as e:
            logfire.warn(
                "Discarding corrupt session cache", path=str(self.path), error=str(e)
            )
            self.clear()
            return None

    def save(self, session: StoredSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(session.model_dump_json())
        os.replace(tmp, self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
