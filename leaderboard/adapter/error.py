"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class CallbackError(AdapterError):
    """The identity provider's callback did not carry a usable identity."""

    pass


class AuthCancelledError(CallbackError):
    """The user cancelled sign-in at the provider."""

    pass


class MalformedResponseError(CallbackError):
    """Callback lacks both success and cancellation markers, or is unparseable."""

    pass
