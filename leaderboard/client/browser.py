"""Sign-in from a terminal: system browser plus a loopback callback server.

Steam redirects the browser to ``http://127.0.0.1:<port>/steam-callback``.
The loopback server turns that request into a relay message and posts it to
the current ``RelayChannel`` as if it came from a callback page.
"""

import asyncio
import time
import webbrowser
from collections.abc import Callable

import logfire
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from leaderboard.adapter.steam.openid import relay_message_from_callback
from leaderboard.client.relay import BrowsingContext, RelayChannel
from leaderboard.domain.value import RelayMessageType

LOOPBACK_HOST = "127.0.0.1"

_DONE_PAGE = """<!DOCTYPE html>
<html lang="en"><head><meta charset="utf-8"><title>{title}</title></head>
<body><p>{title}. You can close this window.</p></body></html>
"""


class SystemBrowserContext(BrowsingContext):
    """Tab opened in the user's default browser.

    A system browser gives no signal when the user closes the tab, so the
    context reports closed once ``timeout`` elapses or after ``close()``.
    """

    def __init__(
        self, timeout: float, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._clock = clock
        self._deadline = clock() + timeout
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed or self._clock() >= self._deadline

    def close(self) -> None:
        self._closed = True


def system_browser_opener(timeout: float):
    """Build an opener that launches the default browser.

    Returns:
        Async callable returning a context, or None if no browser could run
    """

    async def _open(url: str) -> SystemBrowserContext | None:
        if not webbrowser.open(url, new=1):
            return None
        return SystemBrowserContext(timeout=timeout)

    return _open


class LoopbackRelayHost:
    """Local HTTP server receiving the Steam redirect for the CLI."""

    def __init__(self, port: int, callback_path: str = "/steam-callback") -> None:
        self.port = port
        self.callback_path = callback_path
        self.channel: RelayChannel | None = None
        self.app = self._build_app()

        self._server: uvicorn.Server | None = None
        self._task: asyncio.Task | None = None

    @property
    def origin(self) -> str:
        return f"http://{LOOPBACK_HOST}:{self.port}"

    @property
    def return_url(self) -> str:
        return f"{self.origin}{self.callback_path}"

    def attach(self, channel: RelayChannel) -> RelayChannel:
        """Route subsequent callbacks to ``channel``."""
        self.channel = channel
        return channel

    def _build_app(self) -> FastAPI:
        app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

        @app.get(self.callback_path, response_class=HTMLResponse)
        async def steam_callback(request: Request) -> HTMLResponse:
            message = relay_message_from_callback(dict(request.query_params))
            if self.channel is not None:
                self.channel.post_message(message.to_wire(), self.origin)

            title = (
                "Signed in with Steam"
                if message.type is RelayMessageType.SUCCESS
                else "Steam sign-in failed"
            )
            return HTMLResponse(_DONE_PAGE.format(title=title))

        return app

    async def start(self) -> None:
        """Start serving and wait until the socket is bound."""
        config = uvicorn.Config(
            self.app, host=LOOPBACK_HOST, port=self.port, log_level="warning"
        )
        self._server = uvicorn.Server(config)
        self._task = asyncio.create_task(self._server.serve())
        while not self._server.started:
            if self._task.done():
                # Surfaces bind errors
                await self._task
                raise RuntimeError("Loopback server exited during startup")
            await asyncio.sleep(0.05)
        logfire.info("Loopback relay host started", port=self.port)

    async def stop(self) -> None:
        """Stop serving."""
        if self._server is None or self._task is None:
            return
        self._server.should_exit = True
        await self._task
        self._server = None
        self._task = None
