from typing import Dict, Iterable, List

from slackauth.core.exceptions import ProviderNotFoundError
from slackauth.providers.oauth.base import OAuthStrategy


class ProviderRegistry:
    """Provider name -> strategy lookup used by the auth pipeline."""

    def __init__(self, strategies: Iterable[OAuthStrategy] = ()):
        self._strategies: Dict[str, OAuthStrategy] = {}
        for strategy in strategies:
            self.register(strategy)

    def register(self, strategy: OAuthStrategy) -> None:
        self._strategies[strategy.name] = strategy

    def get(self, name: str) -> OAuthStrategy:
        try:
            return self._strategies[name]
        except KeyError:
            raise ProviderNotFoundError(name)

    def names(self) -> List[str]:
        return sorted(self._strategies)

    def __contains__(self, name: object) -> bool:
        return name in self._strategies
