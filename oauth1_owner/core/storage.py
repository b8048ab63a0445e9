from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple
import json
import threading
from ..models.oauth_models import RequestToken
from ..utils.crypto import FernetEncryption
from ..utils.logger import get_logger

logger = get_logger(__name__)

class RequestDataStorage(ABC):
    """
    Holds request token secrets between the first and third leg of the handshake.

    Implementations must keep entries for different (owner, token) keys
    independent when accessed concurrently.
    """

    @abstractmethod
    def save(self, owner: str, token: str, token_secret: str, timestamp: int) -> None:
        """Store a request token under the owner's namespace."""
        pass

    @abstractmethod
    def fetch(self, owner: str, token: str) -> RequestToken:
        """Return a stored request token; raise LookupError if there is none."""
        pass

class MemoryRequestDataStorage(RequestDataStorage):
    """Thread-safe in-process storage; secrets are Fernet-encrypted and fetched at most once."""

    def __init__(self, crypto: Optional[FernetEncryption] = None):
        self.crypto = crypto or FernetEncryption()
        self._entries: Dict[Tuple[str, str], str] = {}
        self._lock = threading.Lock()

    def save(self, owner: str, token: str, token_secret: str, timestamp: int) -> None:
        if not token:
            raise ValueError("Request token must not be empty")

        encrypted = self.crypto.encrypt(json.dumps({
            'oauth_token_secret': token_secret,
            'timestamp': timestamp
        }))
        with self._lock:
            self._entries[(owner, token)] = encrypted
        logger.debug(f"Stored request token {token[:10]}... for {owner}")

    def fetch(self, owner: str, token: str) -> RequestToken:
        with self._lock:
            encrypted = self._entries.pop((owner, token), None)

        if encrypted is None:
            logger.warning(f"No request token {str(token)[:10]}... stored for {owner}")
            raise LookupError(f"No request token stored for {owner}")

        data = json.loads(self.crypto.decrypt(encrypted))
        return RequestToken(
            oauth_token=token,
            oauth_token_secret=data['oauth_token_secret'],
            timestamp=data['timestamp']
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __bool__(self) -> bool:
        # an empty store is still a store
        return True
