from typing import Dict, Literal, Optional, Type
from urllib.parse import urlparse
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator, model_validator
from .user_response import Path, PathUserResponse, UserResponse

class ResourceOwnerConfig(BaseModel):
    """Options of one OAuth 1.0a provider. Unknown keys are rejected."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    client_id: StrictStr
    client_secret: StrictStr

    request_token_url: StrictStr
    authorization_url: StrictStr
    access_token_url: StrictStr
    infos_url: StrictStr

    # The token/verifier pair already binds the callback to the redirect
    csrf: StrictBool = False

    realm: Optional[StrictStr] = None
    signature_method: Literal['HMAC-SHA1', 'HMAC-SHA256', 'PLAINTEXT'] = 'HMAC-SHA1'
    signature_type: Literal['AUTH_HEADER', 'QUERY'] = 'AUTH_HEADER'

    user_response_class: Type[UserResponse] = PathUserResponse
    paths: Dict[str, Path] = Field(default_factory=dict)

    @field_validator('request_token_url', 'authorization_url', 'access_token_url', 'infos_url')
    @classmethod
    def validate_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"Expected an absolute http(s) URL, got {value!r}")
        return value

    @field_validator('client_id', 'client_secret')
    @classmethod
    def validate_credentials(cls, value: str) -> str:
        if not value:
            raise ValueError("Consumer credentials must not be empty")
        return value

    @model_validator(mode='after')
    def validate_realm_placement(self) -> 'ResourceOwnerConfig':
        if self.realm is not None and self.signature_type != 'AUTH_HEADER':
            raise ValueError("realm can only be sent in the Authorization header")
        return self
