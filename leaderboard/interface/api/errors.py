"""Exception handlers mapping domain errors to HTTP responses.

Every failure renders as ``{"success": false, "error": <message>}``. Only
each error class's public message reaches the client; internal detail stays
in the logs.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from leaderboard.domain.error import (
    AuthError,
    InvalidRequestError,
    NotAuthorizedError,
    NotFoundError,
    ProfileNotFoundError,
    SessionExpiredError,
    SessionNotFoundError,
    StorageError,
    UpstreamUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

AUTH_ERROR_STATUS: dict[type[AuthError], int] = {
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
    ProfileNotFoundError: status.HTTP_404_NOT_FOUND,
    UpstreamUnavailableError: status.HTTP_502_BAD_GATEWAY,
    SessionNotFoundError: status.HTTP_401_UNAUTHORIZED,
    SessionExpiredError: status.HTTP_401_UNAUTHORIZED,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
    status_code = AUTH_ERROR_STATUS.get(
        type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")
    return error_response(status_code, exc.public_message)


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, f"{exc.resource} not found")


async def handle_not_authorized(
    request: Request, exc: NotAuthorizedError
) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} forbidden: {exc}")
    return error_response(status.HTTP_403_FORBIDDEN, "Forbidden")


async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} invalid: {exc}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on ``app``."""
    app.add_exception_handler(AuthError, handle_auth_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(NotAuthorizedError, handle_not_authorized)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
