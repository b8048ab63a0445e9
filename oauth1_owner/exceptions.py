"""Exceptions raised by OAuth 1.0a resource owners and their collaborators."""

from enum import Enum
from typing import Optional


class FailureReason(str, Enum):
    """Why an authentication step was rejected."""

    PROVIDER_ERROR = "provider_error"
    CALLBACK_NOT_CONFIRMED = "callback_not_confirmed"
    MALFORMED_RESPONSE = "malformed_response"
    STORAGE_LOOKUP_FAILURE = "storage_lookup_failure"
    UNSUPPORTED_OPERATION = "unsupported_operation"
    MISSING_CALLBACK_TOKEN = "missing_callback_token"


class OAuth1Error(Exception):
    """Base class for every error raised by this package."""


class InvalidConfiguration(OAuth1Error, ValueError):
    """Raised when a resource owner is built with unknown or invalid options."""


class AuthenticationError(OAuth1Error):
    """Raised when a handshake step fails.

    ``reason`` classifies the failure so callers can log or branch on it
    without parsing the message.
    """

    def __init__(self, message: str, reason: FailureReason, owner: Optional[str] = None):
        self.message = message
        self.reason = reason
        self.owner = owner
        super().__init__(message)

    def __str__(self) -> str:
        prefix = f"[{self.owner}] " if self.owner else ""
        return f"{prefix}{self.message} ({self.reason.value})"


class TransportError(OAuth1Error):
    """Raised by a transport when the HTTP exchange itself fails."""

    def __init__(self, method: str, url: str, detail: str):
        self.method = method
        self.url = url
        self.detail = detail
        super().__init__(f"{method} {url} failed: {detail}")
