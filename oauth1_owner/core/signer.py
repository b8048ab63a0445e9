"""OAuth 1.0a request signing.

Builds the signature base string and the signed protocol parameters for one
request (RFC 5849, section 3.4). Nonce and timestamp are always passed in by
the caller so that signing stays deterministic for a given input.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlparse

from oauthlib.oauth1.rfc5849 import (
    SIGNATURE_HMAC_SHA1,
    SIGNATURE_HMAC_SHA256,
    SIGNATURE_PLAINTEXT,
    SIGNATURE_TYPE_AUTH_HEADER,
    SIGNATURE_TYPE_QUERY,
    parameters,
    signature,
)

from ..utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_SIGNATURE_METHODS = (SIGNATURE_HMAC_SHA1, SIGNATURE_HMAC_SHA256, SIGNATURE_PLAINTEXT)
SUPPORTED_SIGNATURE_TYPES = (SIGNATURE_TYPE_AUTH_HEADER, SIGNATURE_TYPE_QUERY)

OAUTH_VERSION = "1.0"


@dataclass(frozen=True)
class SignedRequest:
    """A request ready to hand to a transport."""

    method: str
    url: str
    headers: Dict[str, str]
    oauth_params: Dict[str, str]
    signature: str
    base_string: str
    body_params: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class _SigningSecrets:
    """The two secrets oauthlib's ``*_with_client`` signers read."""

    client_secret: str
    resource_owner_secret: str


class OAuth1Signer:
    """Signs requests with the consumer credentials of one resource owner."""

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        signature_method: str = SIGNATURE_HMAC_SHA1,
        signature_type: str = SIGNATURE_TYPE_AUTH_HEADER,
        realm: Optional[str] = None,
    ):
        if signature_method not in SUPPORTED_SIGNATURE_METHODS:
            raise ValueError(f"Unsupported signature method: {signature_method}")
        if signature_type not in SUPPORTED_SIGNATURE_TYPES:
            raise ValueError(f"Unsupported signature type: {signature_type}")

        self.consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self.signature_method = signature_method
        self.signature_type = signature_type
        self.realm = realm

    def oauth_parameters(
        self,
        nonce: str,
        timestamp: str,
        token: Optional[str] = None,
        extra: Optional[Dict[str, str]] = None,
    ) -> Dict[str, str]:
        """Protocol parameters for a request, without the signature."""
        params = {
            "oauth_consumer_key": self.consumer_key,
            "oauth_nonce": nonce,
            "oauth_signature_method": self.signature_method,
            "oauth_timestamp": str(timestamp),
            "oauth_version": OAUTH_VERSION,
        }
        if token is not None:
            params["oauth_token"] = token
        if extra:
            params.update(extra)
        return params

    def signature_base_string(
        self,
        method: str,
        url: str,
        oauth_params: Dict[str, str],
        body_params: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        Build the signature base string.

        Query parameters already present on ``url`` are signed along with the
        form-encoded body and the protocol parameters.

        Args:
            method: HTTP method
            url: Absolute request URL, possibly carrying a query string
            oauth_params: Protocol parameters (``oauth_signature`` excluded)
            body_params: Form-encoded body parameters

        Returns:
            str: ``METHOD&encoded-uri&encoded-parameters``
        """
        collected: List[Tuple[str, str]] = parse_qsl(urlparse(url).query, keep_blank_values=True)
        if body_params:
            collected.extend(body_params.items())
        collected.extend(
            (key, value) for key, value in oauth_params.items() if key != "oauth_signature"
        )

        normalized = signature.normalize_parameters(collected)
        return signature.signature_base_string(method.upper(), signature.base_string_uri(url), normalized)

    def sign(self, base_string: str, token_secret: Optional[str] = None) -> str:
        """Sign a base string; ``token_secret`` is empty before a token exists."""
        secrets = _SigningSecrets(self._consumer_secret, token_secret or "")

        if self.signature_method == SIGNATURE_HMAC_SHA1:
            return signature.sign_hmac_sha1_with_client(base_string, secrets)
        if self.signature_method == SIGNATURE_HMAC_SHA256:
            return signature.sign_hmac_sha256_with_client(base_string, secrets)
        return signature.sign_plaintext_with_client(base_string, secrets)

    def sign_request(
        self,
        method: str,
        url: str,
        nonce: str,
        timestamp: str,
        token: Optional[str] = None,
        token_secret: Optional[str] = None,
        oauth_extra: Optional[Dict[str, str]] = None,
        body_params: Optional[Dict[str, str]] = None,
    ) -> SignedRequest:
        """
        Sign a request and place the protocol parameters where the configured
        signature type expects them.

        Returns:
            SignedRequest: URL and headers to send, plus the signing artefacts
        """
        method = method.upper()
        oauth_params = self.oauth_parameters(nonce, timestamp, token=token, extra=oauth_extra)
        base_string = self.signature_base_string(method, url, oauth_params, body_params)
        oauth_params["oauth_signature"] = self.sign(base_string, token_secret)

        logger.debug(f"Signed {method} {url} with {self.signature_method}")
        logger.debug(f"Signed parameters: {sorted(oauth_params.keys())}")

        headers: Dict[str, str] = {}
        signed_url = url
        if self.signature_type == SIGNATURE_TYPE_AUTH_HEADER:
            headers = parameters.prepare_headers(list(oauth_params.items()), realm=self.realm)
        else:
            signed_url = parameters.prepare_request_uri_query(list(oauth_params.items()), url)

        return SignedRequest(
            method=method,
            url=signed_url,
            headers=headers,
            oauth_params=oauth_params,
            signature=oauth_params["oauth_signature"],
            base_string=base_string,
            body_params=dict(body_params or {}),
        )
