from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional

class RequestToken(BaseModel):
    """Temporary credentials obtained in the first leg of the handshake."""
    model_config = ConfigDict(frozen=True)

    oauth_token: str
    oauth_token_secret: str
    timestamp: int

class AccessToken(BaseModel):
    """Token credentials returned by the access token endpoint."""
    model_config = ConfigDict(frozen=True)

    oauth_token: str
    oauth_token_secret: str
    extra: Dict[str, Any] = Field(default_factory=dict)  # e.g. user_id, screen_name

    def as_dict(self) -> Dict[str, Any]:
        """Flatten into the shape providers return."""
        data = dict(self.extra)
        data['oauth_token'] = self.oauth_token
        data['oauth_token_secret'] = self.oauth_token_secret
        return data

class UserProfile(BaseModel):
    """Model for user profile data."""
    identifier: Optional[str] = None
    nickname: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    realname: Optional[str] = None
    email: Optional[str] = None
    profile_picture: Optional[str] = None
    resource_owner: str
    raw_data: Dict[str, Any] = Field(default_factory=dict)
