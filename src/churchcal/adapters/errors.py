"""Errors raised by event repository adapters."""


class BackendError(Exception):
    """Raised when the backend rejects or fails a request."""

    pass


class AuthenticationError(BackendError):
    """Raised when the backend refuses our credentials."""

    pass
