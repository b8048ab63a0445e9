"""
Core OAuth 1.0a functionality.
"""

from .oauth_base import ResourceOwnerBase
from .options import ResourceOwnerConfig
from .resource_owner import GenericOAuth1ResourceOwner, HandshakeState
from .response_parser import ParsedResponse, ResponseKind, ClassifiedResponse, parse_response, classify_response
from .signer import OAuth1Signer, SignedRequest
from .storage import RequestDataStorage, MemoryRequestDataStorage
from .transport import Transport, HttpResponse, RequestsTransport
from .user_response import UserResponse, PathUserResponse

__all__ = [
    'ResourceOwnerBase',
    'ResourceOwnerConfig',
    'GenericOAuth1ResourceOwner',
    'HandshakeState',
    'ParsedResponse',
    'ResponseKind',
    'ClassifiedResponse',
    'parse_response',
    'classify_response',
    'OAuth1Signer',
    'SignedRequest',
    'RequestDataStorage',
    'MemoryRequestDataStorage',
    'Transport',
    'HttpResponse',
    'RequestsTransport',
    'UserResponse',
    'PathUserResponse',
]
