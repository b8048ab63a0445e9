"""Generic OAuth 1.0a resource owner.

Drives the three-legged handshake against one provider:

1. ``get_authorization_url`` obtains a request token and stores its secret.
2. The user authorizes the token at the provider and comes back with
   ``oauth_token`` and ``oauth_verifier``.
3. ``get_access_token`` exchanges them for token credentials, which
   ``get_user_information`` then uses to read the user's profile.
"""

from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union
from urllib.parse import urlencode
import time

from oauthlib.common import generate_nonce

from .oauth_base import ResourceOwnerBase
from .response_parser import ClassifiedResponse, classify_response, parse_json_payload, parse_response
from .signer import OAuth1Signer
from .storage import RequestDataStorage
from .transport import HttpResponse, Transport
from .user_response import UserResponse
from ..exceptions import AuthenticationError, FailureReason
from ..models.oauth_models import AccessToken, RequestToken
from ..utils.logger import get_logger

logger = get_logger(__name__)


class HandshakeState(str, Enum):
    IDLE = "idle"
    REQUESTING_TOKEN = "requesting_token"
    AWAITING_AUTHORIZATION = "awaiting_authorization"
    EXCHANGING_ACCESS_TOKEN = "exchanging_access_token"
    COMPLETE = "complete"
    FAILED = "failed"


def normalize_url(url: str, parameters: Dict[str, str]) -> str:
    """Append query parameters to a URL that may already carry a query string."""
    if not parameters:
        return url
    separator = '&' if '?' in url else '?'
    return f"{url}{separator}{urlencode(parameters)}"


class GenericOAuth1ResourceOwner(ResourceOwnerBase):
    """OAuth 1.0a resource owner configured entirely through options."""

    def __init__(
        self,
        transport: Transport,
        options: Mapping[str, Any],
        storage: RequestDataStorage,
        name: Optional[str] = None,
        clock: Callable[[], float] = time.time,
        nonce_factory: Callable[[], str] = generate_nonce,
    ):
        super().__init__(options, name)
        self.transport = transport
        self.storage = storage
        self._clock = clock
        self._nonce_factory = nonce_factory
        self.state = HandshakeState.IDLE

        self.signer = OAuth1Signer(
            self.options.client_id,
            self.options.client_secret,
            signature_method=self.options.signature_method,
            signature_type=self.options.signature_type,
            realm=self.options.realm,
        )

    def handles(self, parameters: Mapping[str, Any]) -> bool:
        return 'oauth_token' in parameters

    def get_authorization_url(self, redirect_uri: str, extra_parameters: Optional[Dict[str, str]] = None) -> str:
        """
        Obtain a request token and build the authorization URL for it.

        Args:
            redirect_uri: Callback the provider sends the user back to
            extra_parameters: Additional ``oauth_*`` protocol parameters or
                              provider-specific form parameters

        Returns:
            str: ``authorization_url`` with ``oauth_token`` appended

        Raises:
            AuthenticationError: if the provider did not issue a request token
        """
        self._transition(HandshakeState.REQUESTING_TOKEN)
        try:
            response = self._signed_request(
                'POST',
                self.options.request_token_url,
                oauth_extra={'oauth_callback': redirect_uri},
                extra_parameters=extra_parameters,
            )
            result = self._expect_token_pair(response, "request token")

            request_token = RequestToken(
                oauth_token=result.fields['oauth_token'],
                oauth_token_secret=result.fields['oauth_token_secret'],
                timestamp=int(self._clock()),
            )
            self.storage.save(
                self.name,
                request_token.oauth_token,
                request_token.oauth_token_secret,
                request_token.timestamp,
            )
        except Exception:
            self._transition(HandshakeState.FAILED)
            raise

        logger.debug(f"Obtained request token {request_token.oauth_token[:10]}... for {self.name}")

        self._transition(HandshakeState.AWAITING_AUTHORIZATION)
        return normalize_url(self.options.authorization_url, {'oauth_token': request_token.oauth_token})

    def get_access_token(self, parameters: Mapping[str, Any], redirect_uri: str,
                         extra_parameters: Optional[Dict[str, str]] = None) -> AccessToken:
        """
        Exchange the authorized request token for token credentials.

        Args:
            parameters: Query parameters of the callback request
            redirect_uri: Callback used for the handshake; OAuth 1.0a does not
                          resend it at this step
            extra_parameters: Additional protocol or form parameters

        Returns:
            AccessToken: the token pair plus any other fields the provider sent

        Raises:
            AuthenticationError: if the request token is unknown or the
                                 provider refused the exchange
        """
        self._transition(HandshakeState.EXCHANGING_ACCESS_TOKEN)
        try:
            oauth_token = parameters.get('oauth_token')
            if not oauth_token:
                raise self._failure("Callback request does not carry an oauth_token.",
                                    FailureReason.MISSING_CALLBACK_TOKEN)

            request_token = self._fetch_request_token(oauth_token)

            oauth_extra = {}
            verifier = parameters.get('oauth_verifier')
            if verifier:
                oauth_extra['oauth_verifier'] = verifier

            response = self._signed_request(
                'POST',
                self.options.access_token_url,
                token=oauth_token,
                token_secret=request_token.oauth_token_secret,
                oauth_extra=oauth_extra,
                extra_parameters=extra_parameters,
            )
            result = self._expect_token_pair(response, "access token")

            fields = dict(result.fields)
            access_token = AccessToken(
                oauth_token=fields.pop('oauth_token'),
                oauth_token_secret=fields.pop('oauth_token_secret'),
                extra=fields,
            )
        except Exception:
            self._transition(HandshakeState.FAILED)
            raise

        logger.debug(f"Obtained access token for {self.name}, extra fields: {sorted(fields.keys())}")

        self._transition(HandshakeState.COMPLETE)
        return access_token

    def get_user_information(self, access_token: Union[AccessToken, Mapping[str, Any]],
                             extra_parameters: Optional[Dict[str, str]] = None) -> UserResponse:
        """
        Read the user's profile with token credentials.

        The body is decoded as JSON whatever content type the provider
        declares, then handed to the configured ``user_response_class``.
        """
        token = self._coerce_access_token(access_token)

        response = self._signed_request(
            'GET',
            self.options.infos_url,
            token=token.oauth_token,
            token_secret=token.oauth_token_secret,
            extra_parameters=extra_parameters,
        )
        data = parse_json_payload(response.body)
        logger.debug(f"User information for {self.name} has keys: {list(data.keys())}")

        return self.options.user_response_class(data, self.paths, token, self.name)

    def refresh_access_token(self, refresh_token: str, extra_parameters: Optional[Dict[str, str]] = None) -> AccessToken:
        raise self._failure("OAuth 1.0a does not support refreshing access tokens.",
                            FailureReason.UNSUPPORTED_OPERATION)

    def revoke_token(self, token: str) -> bool:
        raise self._failure("OAuth 1.0a does not support revoking tokens.",
                            FailureReason.UNSUPPORTED_OPERATION)

    def is_csrf_token_valid(self, csrf_token: Optional[str]) -> bool:
        # The request token is single-use and the verifier ties the callback
        # to it, so there is nothing to check whether csrf is enabled or not.
        logger.debug(f"CSRF check skipped for {self.name} (csrf={self.options.csrf})")
        return True

    def _transition(self, state: HandshakeState) -> None:
        logger.debug(f"{self.name}: {self.state.value} -> {state.value}")
        self.state = state

    def _failure(self, message: str, reason: FailureReason) -> AuthenticationError:
        logger.error(f"Authentication failed for {self.name}: {message} ({reason.value})")
        return AuthenticationError(message, reason, owner=self.name)

    def _signed_request(
        self,
        method: str,
        url: str,
        token: Optional[str] = None,
        token_secret: Optional[str] = None,
        oauth_extra: Optional[Dict[str, str]] = None,
        extra_parameters: Optional[Dict[str, str]] = None,
    ) -> HttpResponse:
        # oauth_* extras are protocol parameters, anything else travels in the body
        protocol = dict(oauth_extra or {})
        form: Dict[str, str] = {}
        for key, value in (extra_parameters or {}).items():
            if key.startswith('oauth_'):
                protocol[key] = value
            else:
                form[key] = value

        if method == 'GET' and form:
            url = normalize_url(url, form)
            form = {}

        signed = self.signer.sign_request(
            method,
            url,
            nonce=self._nonce_factory(),
            timestamp=str(int(self._clock())),
            token=token,
            token_secret=token_secret,
            oauth_extra=protocol,
            body_params=form,
        )

        headers = dict(signed.headers)
        body = None
        if form:
            headers['Content-Type'] = 'application/x-www-form-urlencoded'
            body = urlencode(form)

        return self.transport.send(signed.method, signed.url, headers, body)

    def _expect_token_pair(self, response: HttpResponse, what: str) -> ClassifiedResponse:
        result = classify_response(parse_response(response.body, response.content_type))
        if not result.is_success:
            raise self._failure(f"Could not obtain {what}: {result.reason}", result.failure_reason)
        return result

    def _fetch_request_token(self, oauth_token: str) -> RequestToken:
        try:
            return self.storage.fetch(self.name, oauth_token)
        except Exception as e:
            logger.error(f"Request token lookup failed for {self.name}: {str(e)}")
            raise self._failure("Given token is not valid.",
                                FailureReason.STORAGE_LOOKUP_FAILURE) from e

    def _coerce_access_token(self, access_token: Union[AccessToken, Mapping[str, Any]]) -> AccessToken:
        if isinstance(access_token, AccessToken):
            return access_token
        try:
            extra = {k: v for k, v in access_token.items() if k not in ('oauth_token', 'oauth_token_secret')}
            return AccessToken(
                oauth_token=access_token['oauth_token'],
                oauth_token_secret=access_token['oauth_token_secret'],
                extra=extra,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise self._failure("Access token must carry oauth_token and oauth_token_secret.",
                                FailureReason.MALFORMED_RESPONSE) from e
