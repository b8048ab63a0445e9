from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional
from pydantic import ValidationError
from .options import ResourceOwnerConfig
from .user_response import DEFAULT_PATHS, Path, UserResponse
from ..exceptions import InvalidConfiguration
from ..utils.logger import get_logger

logger = get_logger(__name__)

class ResourceOwnerBase(ABC):
    """Base class for resource owners: options, name and profile paths."""

    def __init__(self, options: Mapping[str, Any], name: Optional[str] = None):
        try:
            self.options = ResourceOwnerConfig.model_validate(dict(options))
        except ValidationError as e:
            logger.error(f"Invalid options for {self.__class__.__name__}: {str(e)}")
            raise InvalidConfiguration(str(e)) from e

        # Derive e.g. 'oauth1' from GenericOAuth1ResourceOwner
        self._name = name or self.__class__.__name__.lower().replace('generic', '').replace('resourceowner', '')

        self._paths: Dict[str, Path] = dict(DEFAULT_PATHS)
        self._paths.update(self.options.paths)

    @property
    def name(self) -> str:
        """Identity used to namespace everything stored for this owner."""
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    @property
    def paths(self) -> Dict[str, Path]:
        return dict(self._paths)

    def add_paths(self, paths: Mapping[str, Path]) -> None:
        """Override or extend the profile field paths."""
        self._paths.update(paths)

    def get_option(self, name: str) -> Any:
        """
        Get a configured option value.

        Raises:
            InvalidConfiguration: if the option does not exist
        """
        if name not in ResourceOwnerConfig.model_fields:
            raise InvalidConfiguration(f"Unknown option: {name}")
        return getattr(self.options, name)

    @abstractmethod
    def handles(self, parameters: Mapping[str, Any]) -> bool:
        """Whether an incoming callback request belongs to this owner."""
        pass

    @abstractmethod
    def get_authorization_url(self, redirect_uri: str, extra_parameters: Optional[Dict[str, str]] = None) -> str:
        """Get the URL the user must visit to authorize the client."""
        pass

    @abstractmethod
    def get_access_token(self, parameters: Mapping[str, Any], redirect_uri: str,
                         extra_parameters: Optional[Dict[str, str]] = None) -> Any:
        """Exchange the callback parameters for an access token."""
        pass

    @abstractmethod
    def get_user_information(self, access_token: Any, extra_parameters: Optional[Dict[str, str]] = None) -> UserResponse:
        """Fetch and map the authorized user's profile."""
        pass

    @abstractmethod
    def refresh_access_token(self, refresh_token: str, extra_parameters: Optional[Dict[str, str]] = None) -> Any:
        """Refresh an expired access token."""
        pass

    @abstractmethod
    def revoke_token(self, token: str) -> bool:
        """Revoke an access token at the provider."""
        pass

    @abstractmethod
    def is_csrf_token_valid(self, csrf_token: Optional[str]) -> bool:
        """Check the anti-forgery token that came back with the callback."""
        pass
