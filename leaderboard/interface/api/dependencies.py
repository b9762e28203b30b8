"""Request dependencies shared by routes."""

from typing import Annotated

from fastapi import Header

from leaderboard.domain.error import SessionNotFoundError


def bearer_token(authorization: Annotated[str | None, Header()] = None) -> str:
    """Extract the session token from an ``Authorization: Bearer`` header.

    Raises:
        SessionNotFoundError: If the header is missing or not a bearer token
    """
    if not authorization:
        raise SessionNotFoundError("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise SessionNotFoundError("Authorization header is not a bearer token")
    return token.strip()
