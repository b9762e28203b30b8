#!/usr/bin/env python3
"""Delete expired sessions. Meant to run from cron."""

import asyncio
import sys

import logfire

from leaderboard.config import Settings
from leaderboard.domain.service import SessionService
from leaderboard.util.di.container import create_container
from leaderboard.util.observability import configure_logfire


async def purge() -> int:
    container = create_container()
    try:
        async with container() as request_container:
            session_service = await request_container.get(SessionService)
            return await session_service.purge_expired()
    finally:
        await container.close()


def main() -> int:
    """Purge expired sessions and report the count."""
    configure_logfire(Settings())

    removed = asyncio.run(purge())
    logfire.info("Session purge finished", removed=removed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
