"""Contract every provider strategy fulfils for the auth pipeline."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from slackauth.schemas.oauth import CallbackState, Credentials, Extra, Info


class OAuthStrategy(ABC):
    """Abstract base class for OAuth provider strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier used in routes and the registry."""

    @abstractmethod
    def build_authorize_url(
        self,
        redirect_uri: str,
        scope: Optional[str] = None,
        state: Optional[str] = None,
        team: Optional[str] = None,
    ) -> str:
        """Compose the provider's authorize-redirect URL."""

    @abstractmethod
    async def handle_callback(
        self, params: Mapping[str, Any], redirect_uri: str
    ) -> CallbackState:
        """Turn the callback request into a filled (or failed) per-callback state."""

    @abstractmethod
    def uid(self, state: CallbackState) -> Optional[Any]:
        ...

    @abstractmethod
    def credentials(self, state: CallbackState) -> Credentials:
        ...

    @abstractmethod
    def info(self, state: CallbackState) -> Union[Info, CallbackState]:
        ...

    @abstractmethod
    def extra(self, state: CallbackState) -> Extra:
        ...

    def cleanup(self, state: CallbackState) -> CallbackState:
        """Drop provider data once the normalized identity has been built."""
        return state
