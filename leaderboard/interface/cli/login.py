"""Command-line Steam sign-in.

    leaderboard-login login     # opens the browser, waits for Steam
    leaderboard-login whoami    # re-validates the cached session
    leaderboard-login logout
"""

import argparse
import asyncio
import sys

from leaderboard.client.api import SessionApiClient
from leaderboard.client.browser import LoopbackRelayHost, system_browser_opener
from leaderboard.client.cache import FileTokenCache
from leaderboard.client.errors import SignInError
from leaderboard.client.relay import RelayChannel
from leaderboard.client.session_manager import ClientSessionManager
from leaderboard.config import Settings
from leaderboard.util.observability import configure_logfire


def _build_manager(
    settings: Settings, host: LoopbackRelayHost
) -> ClientSessionManager:
    client = settings.client
    opener = system_browser_opener(timeout=client.sign_in_timeout_seconds)

    def relay_factory() -> RelayChannel:
        return host.attach(
            RelayChannel(
                opener,
                expected_origin=host.origin,
                poll_interval=client.poll_interval_seconds,
            )
        )

    return ClientSessionManager(
        api=SessionApiClient(
            client.api_url, timeout=settings.steam.request_timeout_seconds
        ),
        cache=FileTokenCache(client.cache_path),
        relay_factory=relay_factory,
        return_url=host.return_url,
        openid_endpoint=settings.steam.openid_endpoint,
    )


async def _login(manager: ClientSessionManager, host: LoopbackRelayHost) -> int:
    await host.start()
    try:
        print("Complete the sign-in in your browser...")
        user = await manager.sign_in()
    except SignInError as e:
        print(f"Sign-in failed ({e.reason.value}): {e}", file=sys.stderr)
        return 1
    finally:
        await host.stop()

    print(f"Signed in as {user.username} ({user.steam_id})")
    return 0


async def _whoami(manager: ClientSessionManager) -> int:
    user = await manager.restore()
    if user is None:
        print("Not signed in")
        return 1
    print(f"{user.username} ({user.steam_id})")
    return 0


async def _logout(manager: ClientSessionManager) -> int:
    await manager.sign_out()
    print("Signed out")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(prog="leaderboard-login")
    sub = parser.add_subparsers(dest="cmd", required=True)
    settings = Settings()

    login = sub.add_parser("login")
    login.add_argument("--port", type=int, default=settings.client.loopback_port)
    sub.add_parser("whoami")
    sub.add_parser("logout")

    args = parser.parse_args()

    configure_logfire(settings)

    host = LoopbackRelayHost(
        port=getattr(args, "port", settings.client.loopback_port),
        callback_path=settings.auth.callback_path,
    )
    manager = _build_manager(settings, host)

    if args.cmd == "login":
        code = asyncio.run(_login(manager, host))
    elif args.cmd == "whoami":
        code = asyncio.run(_whoami(manager))
    elif args.cmd == "logout":
        code = asyncio.run(_logout(manager))
    else:
        raise SystemExit(2)
    raise SystemExit(code)


if __name__ == "__main__":
    main()
