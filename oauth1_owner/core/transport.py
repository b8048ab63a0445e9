from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional
import requests
from ..config import get_settings
from ..exceptions import TransportError
from ..utils.logger import get_logger

logger = get_logger(__name__)

@dataclass(frozen=True)
class HttpResponse:
    """What a resource owner needs back from an HTTP exchange."""
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    @property
    def content_type(self) -> Optional[str]:
        return self.header('Content-Type')

class Transport(ABC):
    """Sends fully signed requests. Timeouts and retries are the transport's business."""

    @abstractmethod
    def send(self, method: str, url: str, headers: Optional[Dict[str, str]] = None,
             body: Optional[str] = None) -> HttpResponse:
        """Perform one HTTP exchange; raise TransportError if it cannot complete."""
        pass

class RequestsTransport(Transport):
    """Transport backed by a requests session."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        settings = get_settings()
        self.session = session or requests.Session()
        self.timeout = timeout or settings.HTTP_TIMEOUT
        self.user_agent = settings.HTTP_USER_AGENT

    def send(self, method: str, url: str, headers: Optional[Dict[str, str]] = None,
             body: Optional[str] = None) -> HttpResponse:
        request_headers = {'User-Agent': self.user_agent}
        request_headers.update(headers or {})
        if body is not None and 'Content-Type' not in request_headers:
            request_headers['Content-Type'] = 'application/x-www-form-urlencoded'

        logger.debug(f"Sending {method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                headers=request_headers,
                data=body,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"HTTP request {method} {url} failed: {str(e)}")
            raise TransportError(method, url, str(e)) from e

        logger.debug(f"Response status: {response.status_code}")
        if response.status_code >= 400:
            logger.warning(f"{method} {url} returned status {response.status_code}")

        return HttpResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.text
        )
