"""
OAuth 1.0a Resource Owner
-------------------------
Client side of the three-legged OAuth 1.0a handshake with provider profile mapping.
"""

from .core import (
    GenericOAuth1ResourceOwner,
    MemoryRequestDataStorage,
    RequestDataStorage,
    RequestsTransport,
    Transport,
    PathUserResponse,
    UserResponse,
)
from .exceptions import AuthenticationError, FailureReason, InvalidConfiguration, OAuth1Error, TransportError
from .models import AccessToken, RequestToken, UserProfile

__version__ = "1.0.0"
__all__ = [
    'GenericOAuth1ResourceOwner',
    'MemoryRequestDataStorage',
    'RequestDataStorage',
    'RequestsTransport',
    'Transport',
    'PathUserResponse',
    'UserResponse',
    'AuthenticationError',
    'FailureReason',
    'InvalidConfiguration',
    'OAuth1Error',
    'TransportError',
    'AccessToken',
    'RequestToken',
    'UserProfile',
]
