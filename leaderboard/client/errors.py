"""Errors raised by the sign-in client."""

from enum import Enum


class ClientError(Exception):
    """Base client error."""

    pass


class SignInReason(str, Enum):
    """Short, user-facing reason a sign-in failed."""

    CANCELLED = "cancelled"
    POPUP_BLOCKED = "popup_blocked"
    SERVICE_UNAVAILABLE = "service_unavailable"
    UNKNOWN = "unknown"


class SignInError(ClientError):
    """Sign-in did not produce a session."""

    def __init__(self, reason: SignInReason, message: str | None = None):
        self.reason = reason
        super().__init__(message or reason.value)


class SignInInProgressError(ClientError):
    """Another sign-in is still pending on this manager."""

    pass


class PopupBlockedError(ClientError):
    """The browsing context for the provider could not be opened."""

    pass


class SessionApiError(ClientError):
    """The session API refused a request or could not be reached.

    ``status_code`` is None when no HTTP response was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_unavailable(self) -> bool:
        """True for network failures and gateway errors."""
        return self.status_code is None or self.status_code in (502, 503, 504)
