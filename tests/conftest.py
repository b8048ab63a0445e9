import os
from typing import Dict, List, NamedTuple, Optional

import pytest
from cryptography.fernet import Fernet

# Must be set before the package reads its cached settings
os.environ['ENVIRONMENT'] = 'test'
os.environ['ENCRYPTION_KEY'] = Fernet.generate_key().decode()
os.environ.pop('LOG_FILE', None)

from oauth1_owner.core import GenericOAuth1ResourceOwner, HttpResponse, RequestDataStorage, Transport
from oauth1_owner.core.user_response import PathUserResponse
from oauth1_owner.models import RequestToken

FIXED_TIME = 1700000000
FIXED_NONCE = 'fixednonce'


class SentRequest(NamedTuple):
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[str]


class FakeTransport(Transport):
    """Replays queued responses and records what was sent."""

    def __init__(self):
        self.responses: List[object] = []
        self.requests: List[SentRequest] = []

    def queue(self, body: str = '', content_type: str = 'text/plain', status: int = 200):
        self.responses.append(HttpResponse(status=status, headers={'Content-Type': content_type}, body=body))

    def queue_error(self, error: Exception):
        self.responses.append(error)

    def send(self, method, url, headers=None, body=None):
        self.requests.append(SentRequest(method, url, dict(headers or {}), body))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class RecordingStorage(RequestDataStorage):
    """Records calls; save and fetch raise what the test configured."""

    def __init__(self):
        self.saved = []
        self.fetched = []
        self.fetch_result: Optional[RequestToken] = None
        self.fetch_error: Optional[Exception] = None
        self.save_error: Optional[Exception] = None

    def save(self, owner, token, token_secret, timestamp):
        if self.save_error is not None:
            raise self.save_error
        self.saved.append((owner, token, token_secret, timestamp))

    def fetch(self, owner, token):
        self.fetched.append((owner, token))
        if self.fetch_error is not None:
            raise self.fetch_error
        if self.fetch_result is None:
            raise LookupError(token)
        return self.fetch_result


class CustomUserResponse(PathUserResponse):
    @property
    def username(self):
        return 'foo666'

    @property
    def nickname(self):
        return 'foo'


@pytest.fixture
def options():
    return {
        'client_id': 'clientid',
        'client_secret': 'clientsecret',
        'infos_url': 'http://user.info/?test=1',
        'request_token_url': 'http://user.request/?test=2',
        'authorization_url': 'http://user.auth/?test=3',
        'access_token_url': 'http://user.access/?test=4',
    }


@pytest.fixture
def paths():
    return {
        'identifier': 'id',
        'nickname': 'foo',
        'realname': 'foo_disp',
    }


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def make_owner(transport, storage, options, paths):
    """Build a resource owner with a fixed clock and nonce."""
    def _make(extra_options=None, extra_paths=None, storage_override=None):
        owner = GenericOAuth1ResourceOwner(
            transport,
            {**options, **(extra_options or {})},
            storage_override if storage_override is not None else storage,
            clock=lambda: FIXED_TIME,
            nonce_factory=lambda: FIXED_NONCE,
        )
        owner.add_paths({**paths, **(extra_paths or {})})
        return owner
    return _make


@pytest.fixture
def resource_owner(make_owner):
    return make_owner()


@pytest.fixture
def stored_request_token(storage):
    storage.fetch_result = RequestToken(oauth_token='token2', oauth_token_secret='secret2', timestamp=FIXED_TIME)
    return storage.fetch_result
