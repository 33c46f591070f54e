from typing import Any, Mapping, Optional
import logging

from slackauth.providers.registry import ProviderRegistry
from slackauth.schemas.oauth import AuthResult, CallbackResult, Info

logger = logging.getLogger(__name__)


class AuthService:
    """Runs provider strategies and turns their state into a normalized identity"""

    def __init__(self, registry: ProviderRegistry):
        self.registry = registry

    def get_oauth_auth_url(
        self,
        provider: str,
        redirect_uri: str,
        scope: Optional[str] = None,
        state: Optional[str] = None,
        team: Optional[str] = None,
    ) -> str:
        strategy = self.registry.get(provider)
        return strategy.build_authorize_url(
            redirect_uri, scope=scope, state=state, team=team
        )

    async def process_oauth_callback(
        self, provider: str, params: Mapping[str, Any], redirect_uri: str
    ) -> CallbackResult:
        """Handle the provider callback.

        Failures come back as `CallbackResult(success=False)` with the ordered
        errors; the identity is only assembled for a clean callback.
        """
        strategy = self.registry.get(provider)
        state = await strategy.handle_callback(params, redirect_uri)

        if state.failed:
            kinds = ", ".join(error.kind.value for error in state.errors)
            logger.warning(f"OAuth callback for {provider} failed: {kinds}")
            return CallbackResult(success=False, errors=list(state.errors))

        info = strategy.info(state)
        auth = AuthResult(
            provider=provider,
            uid=strategy.uid(state),
            credentials=strategy.credentials(state),
            info=info if isinstance(info, Info) else None,
            extra=strategy.extra(state),
        )
        strategy.cleanup(state)
        logger.info(f"OAuth callback for {provider} succeeded (uid present: {auth.uid is not None})")
        return CallbackResult(success=True, auth=auth)
