"""Exceptions raised while talking to the toko backend."""

from typing import Optional


class TokoListError(Exception):
    """Base class for recoverable list loading failures."""

    default_message = "Failed to load data"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class PreconditionError(TokoListError):
    """Raised when the session lacks the identity a request needs."""

    default_message = "Toko ID not found in session"


class TransportError(TokoListError):
    """Raised on network failures, non-2xx responses and unreadable bodies."""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PayloadError(TokoListError):
    """Raised when a well-formed response carries ``success: false``."""

    default_message = "Server rejected the request"


def raise_for_payload(body) -> None:
    """Raise PayloadError when the backend flags the response as failed."""
    if isinstance(body, dict) and body.get("success") is False:
        message = body.get("message")
        raise PayloadError(message if isinstance(message, str) else None)
