"""Relay of the Steam sign-in result from the browsing context to the initiator.

One ``RelayChannel`` drives one attempt:

    OPENED -> AWAITING_RESULT -> RESOLVED_SUCCESS | RESOLVED_FAILURE

The callback page posts a ``RelayMessage`` into ``post_message`` while a
watchdog polls the browsing context for closure. Whichever happens first
resolves the attempt and the other path is cancelled on the spot. Everything
runs on one event loop, so no locks are needed.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

import logfire
from pydantic import BaseModel

from leaderboard.client.errors import PopupBlockedError
from leaderboard.domain.value import RelayMessage, RelayMessageType, SteamId

CLOSED_BY_USER = "Authentication cancelled by user"


class RelayState(str, Enum):
    OPENED = "opened"
    AWAITING_RESULT = "awaiting_result"
    RESOLVED_SUCCESS = "resolved_success"
    RESOLVED_FAILURE = "resolved_failure"


class BrowsingContext(ABC):
    """Window or tab in which the user authenticates with Steam."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        """Whether the context is gone."""

    @abstractmethod
    def close(self) -> None:
        """Close the context. Must be idempotent."""


Opener = Callable[[str], Awaitable[BrowsingContext | None]]


class RelayResult(BaseModel):
    """Outcome of one relay attempt."""

    state: RelayState
    steam_id: SteamId | None = None
    ticket: str | None = None
    assertion: dict[str, str] | None = None
    error: str | None = None
    # True when the user closed the context before any message arrived
    closed_by_user: bool = False

    @property
    def succeeded(self) -> bool:
        return self.state is RelayState.RESOLVED_SUCCESS


class RelayChannel:
    """Single-use relay for one sign-in attempt."""

    def __init__(
        self,
        opener: Opener,
        expected_origin: str,
        poll_interval: float = 1.0,
    ) -> None:
        """Initialize relay channel.

        Args:
            opener: Opens the browsing context at a URL; None means blocked
            expected_origin: Only messages from this origin are accepted
            poll_interval: Seconds between closure checks
        """
        self.opener = opener
        self.expected_origin = expected_origin
        self.poll_interval = poll_interval

        self.state: RelayState | None = None
        self._context: BrowsingContext | None = None
        self._watchdog: asyncio.Task | None = None
        self._result: asyncio.Future[RelayResult] | None = None

    async def run(self, auth_url: str) -> RelayResult:
        """Open the context at ``auth_url`` and wait for the outcome.

        Raises:
            PopupBlockedError: If the context could not be opened
            RuntimeError: If the channel was already used
        """
        if self.state is not None or self._result is not None:
            raise RuntimeError("Relay channel is single-use")

        self._result = asyncio.get_running_loop().create_future()

        context = await self.opener(auth_url)
        if context is None:
            logfire.warn("Browsing context blocked")
            raise PopupBlockedError("Popup blocked - please allow popups for this site")

        self._context = context
        self.state = RelayState.OPENED
        self._watchdog = asyncio.create_task(self._watch_closure())
        self.state = RelayState.AWAITING_RESULT

        try:
            return await self._result
        finally:
            self._stop_watchdog()
            if not self._result.done():
                # Abandoned (e.g. the caller was cancelled)
                self._context.close()

    def post_message(self, data: Any, origin: str) -> bool:
        """Deliver a message from the browsing context.

        Args:
            data: Posted JSON object
            origin: Origin of the posting document

        Returns:
            True if the message resolved the attempt
        """
        if self.state is not RelayState.AWAITING_RESULT:
            logfire.info("Relay message ignored", state=str(self.state))
            return False

        if origin != self.expected_origin:
            logfire.warn(
                "Relay message from unexpected origin",
                origin=origin,
                expected=self.expected_origin,
            )
            return False

        try:
            message = RelayMessage.from_wire(data)
        except ValueError as e:
            logfire.info("Relay message does not match schema", error=str(e))
            return False

        self._context.close()

        if message.type is RelayMessageType.SUCCESS:
            self._resolve(
                RelayResult(
                    state=RelayState.RESOLVED_SUCCESS,
                    steam_id=SteamId(message.steam_id),
                    ticket=message.ticket,
                    assertion=message.assertion,
                )
            )
        else:
            self._resolve(
                RelayResult(
                    state=RelayState.RESOLVED_FAILURE,
                    error=message.error or "Steam authentication failed",
                )
            )
        return True

    async def _watch_closure(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            if self._context.closed:
                logfire.info("Browsing context closed before a result")
                self._resolve(
                    RelayResult(
                        state=RelayState.RESOLVED_FAILURE,
                        error=CLOSED_BY_USER,
                        closed_by_user=True,
                    )
                )
                return

    def _resolve(self, result: RelayResult) -> None:
        if self._result is None or self._result.done():
            return
        self.state = result.state
        self._stop_watchdog()
        self._result.set_result(result)
        logfire.info("Relay resolved", state=result.state.value)

    def _stop_watchdog(self) -> None:
        watchdog = self._watchdog
        if watchdog is not None and watchdog is not asyncio.current_task():
            watchdog.cancel()
