"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when an authenticated user lacks permission for an operation."""

    def __init__(self, action: str, user_id: str):
        super().__init__(f"User {user_id} is not authorized to {action}")


class AuthError(DomainError):
    """Base for failures of the sign-in and session boundary.

    ``public_message`` is safe to show to callers; the exception message may
    carry internal detail for logs.
    """

    public_message = "Authentication failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class InvalidRequestError(AuthError):
    """Caller violated the request contract. Not retryable."""

    public_message = "Invalid request"


class UpstreamUnavailableError(AuthError):
    """Steam could not be reached or answered with an error. Retryable."""

    public_message = "Steam API request failed"


class ProfileNotFoundError(AuthError):
    """Steam knows the ID but returned no profile for it."""

    public_message = "Steam profile not found"


class SessionNotFoundError(AuthError):
    """No session exists for the presented token."""

    public_message = "Invalid session"


class SessionExpiredError(AuthError):
    """Session exists but was deactivated or has passed its expiry."""

    public_message = "Invalid session"


class StorageError(AuthError):
    """Persistence layer failure."""

    public_message = "Database error"
