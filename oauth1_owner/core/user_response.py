from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union
from ..models.oauth_models import AccessToken, UserProfile

Path = Union[str, List[str], None]

DEFAULT_PATHS: Dict[str, Path] = {
    'identifier': None,
    'nickname': None,
    'firstname': None,
    'lastname': None,
    'realname': None,
    'email': None,
    'profilepicture': None,
}

def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)

class UserResponse(ABC):
    """
    Strategy turning a provider's user information payload into profile fields.

    Subclasses decide how fields are found; the resource owner only hands over
    the decoded payload, the configured paths and the access token.
    """

    def __init__(self, data: Dict[str, Any], paths: Dict[str, Path], access_token: AccessToken,
                 resource_owner_name: str):
        self.data = data
        self.paths = paths
        self._access_token = access_token
        self.resource_owner_name = resource_owner_name

    @property
    @abstractmethod
    def username(self) -> Optional[Any]:
        """Unique identifier of the user at the provider."""
        pass

    @property
    @abstractmethod
    def nickname(self) -> Optional[Any]:
        pass

    @property
    def first_name(self) -> Optional[Any]:
        return None

    @property
    def last_name(self) -> Optional[Any]:
        return None

    @property
    def realname(self) -> Optional[Any]:
        return None

    @property
    def email(self) -> Optional[Any]:
        return None

    @property
    def profile_picture(self) -> Optional[Any]:
        return None

    @property
    def access_token(self) -> str:
        return self._access_token.oauth_token

    @property
    def token_secret(self) -> str:
        return self._access_token.oauth_token_secret

    @property
    def refresh_token(self) -> None:
        # OAuth 1.0a tokens are neither refreshed nor expire
        return None

    @property
    def expires_in(self) -> None:
        return None

    def to_profile(self) -> UserProfile:
        """Snapshot of the mapped fields; unmapped fields are None."""
        return UserProfile(
            identifier=_as_text(self.username),
            nickname=_as_text(self.nickname),
            first_name=_as_text(self.first_name),
            last_name=_as_text(self.last_name),
            realname=_as_text(self.realname),
            email=_as_text(self.email),
            profile_picture=_as_text(self.profile_picture),
            resource_owner=self.resource_owner_name,
            raw_data=self.data
        )

class PathUserResponse(UserResponse):
    """
    Resolves each profile field through a configured path.

    A path is a dotted key (``user.screen_name``) walked through nested
    objects. A list of paths joins the non-empty values with a space, which
    covers providers that split a display name over several fields.
    """

    @property
    def username(self) -> Optional[Any]:
        return self.get_value_for_path('identifier')

    @property
    def nickname(self) -> Optional[Any]:
        return self.get_value_for_path('nickname')

    @property
    def first_name(self) -> Optional[Any]:
        return self.get_value_for_path('firstname')

    @property
    def last_name(self) -> Optional[Any]:
        return self.get_value_for_path('lastname')

    @property
    def realname(self) -> Optional[Any]:
        return self.get_value_for_path('realname')

    @property
    def email(self) -> Optional[Any]:
        return self.get_value_for_path('email')

    @property
    def profile_picture(self) -> Optional[Any]:
        return self.get_value_for_path('profilepicture')

    def get_value_for_path(self, name: str) -> Optional[Any]:
        path = self.paths.get(name)
        if not path:
            return None

        if isinstance(path, (list, tuple)):
            values = [self._resolve(step) for step in path]
            joined = ' '.join(str(value) for value in values if value not in (None, ''))
            return joined or None

        return self._resolve(path)

    def _resolve(self, path: str) -> Optional[Any]:
        node: Any = self.data
        for key in path.split('.'):
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        return node
