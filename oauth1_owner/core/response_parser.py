"""Parsing and classification of token endpoint responses.

Providers answer the request token and access token endpoints either with a
form-encoded body or with JSON. Both shapes are reduced to a flat
``str -> str`` mapping and then classified by an ordered rule table.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, NamedTuple, Optional, Tuple
from urllib.parse import parse_qsl

from ..exceptions import AuthenticationError, FailureReason
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParsedResponse:
    """Either the parsed fields of a body or the reason it could not be parsed."""

    fields: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def ok(cls, fields: Dict[str, str]) -> "ParsedResponse":
        return cls(fields=fields)

    @classmethod
    def failure(cls, reason: str) -> "ParsedResponse":
        return cls(error=reason)

    @property
    def is_error(self) -> bool:
        return self.error is not None


class ResponseKind(str, Enum):
    SUCCESS = "success"
    PROVIDER_ERROR = "provider_error"
    CALLBACK_NOT_CONFIRMED = "callback_not_confirmed"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class ClassifiedResponse:
    kind: ResponseKind
    fields: Dict[str, str] = field(default_factory=dict)
    reason: str = ""

    @property
    def is_success(self) -> bool:
        return self.kind is ResponseKind.SUCCESS

    @property
    def failure_reason(self) -> FailureReason:
        return FailureReason(self.kind.value)


class _Rule(NamedTuple):
    kind: ResponseKind
    matches: Callable[[Dict[str, str]], bool]
    describe: Callable[[Dict[str, str]], str]


# Order matters: a body carrying oauth_problem next to a token pair is still
# a provider error, and a lone oauth_token is never a success.
CLASSIFICATION_RULES: Tuple[_Rule, ...] = (
    _Rule(
        ResponseKind.PROVIDER_ERROR,
        lambda f: "oauth_problem" in f,
        lambda f: f'OAuth error: "{f["oauth_problem"]}"',
    ),
    _Rule(
        ResponseKind.CALLBACK_NOT_CONFIRMED,
        lambda f: "oauth_callback_confirmed" in f and f["oauth_callback_confirmed"] != "true",
        lambda f: "Defined OAuth callback was not confirmed.",
    ),
    _Rule(
        ResponseKind.SUCCESS,
        lambda f: "oauth_token" in f and "oauth_token_secret" in f,
        lambda f: "",
    ),
    _Rule(
        ResponseKind.PROVIDER_ERROR,
        lambda f: "error" in f,
        lambda f: f'OAuth error: "{f["error"]}"',
    ),
)


def is_json_content_type(content_type: Optional[str]) -> bool:
    """True when the media type names JSON; parameters such as charset are ignored."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return "json" in media_type


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def parse_response(body: str, content_type: Optional[str] = None) -> ParsedResponse:
    """
    Parse a token endpoint body.

    Args:
        body: Raw response body
        content_type: Value of the Content-Type header, if any

    Returns:
        ParsedResponse: flat fields, or the reason parsing failed
    """
    if is_json_content_type(content_type):
        try:
            data = json.loads(body)
        except ValueError as e:
            logger.debug(f"Response declared as JSON but could not be decoded: {str(e)}")
            return ParsedResponse.failure(f"Invalid JSON body: {str(e)}")

        if not isinstance(data, dict):
            return ParsedResponse.failure("JSON body is not an object")

        # null members count as absent
        return ParsedResponse.ok({str(k): _stringify(v) for k, v in data.items() if v is not None})

    try:
        pairs = parse_qsl((body or "").strip(), keep_blank_values=True, strict_parsing=True)
    except ValueError as e:
        logger.debug(f"Response is not a valid query string: {str(e)}")
        return ParsedResponse.failure(f"Invalid query string body: {str(e)}")

    return ParsedResponse.ok(dict(pairs))


def classify_response(parsed: ParsedResponse) -> ClassifiedResponse:
    """Apply the classification rules in order; the first match wins."""
    if parsed.is_error:
        return ClassifiedResponse(ResponseKind.MALFORMED_RESPONSE, reason=parsed.error)

    for rule in CLASSIFICATION_RULES:
        if rule.matches(parsed.fields):
            return ClassifiedResponse(rule.kind, parsed.fields, rule.describe(parsed.fields))

    return ClassifiedResponse(
        ResponseKind.MALFORMED_RESPONSE,
        parsed.fields,
        "Response does not contain oauth_token and oauth_token_secret.",
    )


def parse_json_payload(body: str) -> Dict[str, Any]:
    """Decode a user information body as a JSON object, whatever its content type."""
    if not body or not body.strip():
        return {}

    try:
        data = json.loads(body)
    except ValueError as e:
        logger.error(f"User information response is not valid JSON: {str(e)}")
        raise AuthenticationError(
            "User information response is not valid JSON.", FailureReason.MALFORMED_RESPONSE
        ) from e

    if not isinstance(data, dict):
        logger.error(f"User information response is a JSON {type(data).__name__}, not an object")
        raise AuthenticationError(
            "User information response is not a JSON object.", FailureReason.MALFORMED_RESPONSE
        )

    return data
