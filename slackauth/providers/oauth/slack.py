import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from slackauth.config import Settings
from slackauth.core.exceptions import TransportError
from slackauth.providers.oauth.base import OAuthStrategy
from slackauth.providers.oauth.client import SlackOAuthClient
from slackauth.schemas.oauth import (
    AuthVerificationRecord,
    CallbackError,
    CallbackState,
    Credentials,
    ErrorKind,
    Extra,
    Info,
    ProviderResponse,
    Token,
    UserIdentityResponse,
)

logger = logging.getLogger(__name__)

PROFILE_SCOPE = "identity.basic"


def _unauthorized() -> CallbackError:
    return CallbackError(kind=ErrorKind.UNAUTHORIZED, message="unauthorized", code="token")


def _provider_error(code: Optional[str], description: Optional[str] = None) -> CallbackError:
    code = code or "unknown_error"
    return CallbackError(
        kind=ErrorKind.PROVIDER_ERROR, code=code, message=description or code
    )


def _transport_error(reason: str) -> CallbackError:
    return CallbackError(kind=ErrorKind.TRANSPORT_ERROR, message=reason)


class SlackOAuthProvider(OAuthStrategy):
    """Sign in with Slack.

    The callback makes up to two API calls after the code exchange:
    `auth.test` to learn which user the token belongs to, then
    `users.identity` for that user, but only when the `identity.basic`
    scope was granted. All data lives on the CallbackState passed in and out.
    """

    def __init__(self, client: SlackOAuthClient, settings: Settings):
        self.client = client
        self.uid_field = settings.SLACK_UID_FIELD
        self.default_scope = settings.SLACK_DEFAULT_SCOPE
        self.team = settings.SLACK_TEAM

    @property
    def name(self) -> str:
        return "slack"

    def build_authorize_url(
        self,
        redirect_uri: str,
        scope: Optional[str] = None,
        state: Optional[str] = None,
        team: Optional[str] = None,
    ) -> str:
        """Generate Slack OAuth authorization URL"""
        params = {"scope": scope or self.default_scope}
        if state:
            params["state"] = state
        team = team or self.team
        if team:
            params["team"] = team
        if redirect_uri.endswith("?"):
            redirect_uri = redirect_uri[:-1]
        params["redirect_uri"] = redirect_uri
        return self.client.authorize_url(params)

    async def handle_callback(
        self, params: Mapping[str, Any], redirect_uri: str
    ) -> CallbackState:
        state = CallbackState(provider=self.name)
        code = params.get("code")
        if not code:
            logger.info("Slack callback without authorization code")
            return state.set_errors(
                CallbackError(kind=ErrorKind.MISSING_CODE, message="No code received")
            )

        try:
            token = await self.client.get_token(code, redirect_uri)
        except TransportError as e:
            return state.set_errors(_transport_error(e.reason))

        if token.access_token is None:
            error = token.provider_error
            logger.info(f"Slack token exchange rejected: {error.code if error else None}")
            return state.set_errors(
                _provider_error(
                    error.code if error else None, error.description if error else None
                )
            )

        state.token = token
        await self._fetch_auth(state, token)
        await self._fetch_user(state, token)
        return state

    async def _call(
        self, state: CallbackState, token: Token, path: str, params=None
    ) -> Optional[ProviderResponse]:
        """Run one API call; on failure the error is attached and None returned."""
        try:
            response = await self.client.get(token, path, params)
        except TransportError as e:
            state.set_errors(_transport_error(e.reason))
            return None

        if response.status_code == 401:
            state.set_errors(_unauthorized())
            return None
        if not 200 <= response.status_code < 400:
            logger.warning(f"Slack {path} returned status {response.status_code}")
            state.set_errors(_transport_error(f"unexpected status {response.status_code}"))
            return None
        return response

    async def _fetch_auth(self, state: CallbackState, token: Token) -> None:
        # auth.test gives us the user id that users.identity needs
        response = await self._call(state, token, "/auth.test")
        if response is None:
            return
        try:
            auth = AuthVerificationRecord.model_validate(response.body)
        except ValidationError as e:
            logger.warning(f"Slack auth.test returned a malformed body: {e.error_count()} errors")
            state.set_errors(_provider_error("invalid_response", str(e)))
            return
        if auth.ok:
            state.auth = auth
        else:
            logger.info(f"invalid token when fetching auth: {auth.error}")
            state.set_errors(_provider_error(auth.error))

    async def _fetch_user(self, state: CallbackState, token: Token) -> None:
        if state.failed:
            return
        if PROFILE_SCOPE not in token.granted_scopes:
            return

        response = await self._call(
            state, token, "/users.identity", {"user": state.auth.user_id}
        )
        if response is None:
            return
        try:
            identity = UserIdentityResponse.model_validate(response.body)
        except ValidationError as e:
            logger.warning(f"Slack users.identity returned a malformed body: {e.error_count()} errors")
            state.set_errors(_provider_error("invalid_response", str(e)))
            return
        if identity.ok:
            state.user = identity.user
        else:
            logger.info(f"Slack users.identity failed: {identity.error}")
            state.set_errors(_provider_error(identity.error))

    def uid(self, state: CallbackState, uid_field: Optional[str] = None) -> Optional[Any]:
        info = self.info(state)
        if not isinstance(info, Info):
            return None
        return getattr(info, uid_field or self.uid_field, None)

    def credentials(self, state: CallbackState) -> Credentials:
        token = state.token
        auth = state.auth
        return Credentials(
            token=token.access_token,
            refresh_token=token.refresh_token,
            expires_at=token.expires_at,
            token_type=token.token_type,
            expires=token.expires_at is not None,
            scopes=list(token.granted_scopes),
            other={
                "user": auth.user,
                "user_id": auth.user_id,
                "team": auth.team,
                "team_id": auth.team_id,
                "team_url": auth.url,
            },
        )

    def info(self, state: CallbackState) -> Union[Info, CallbackState]:
        user = state.user
        if user is None:
            return state

        team_url = state.auth.url if state.auth else None
        return Info(
            name=user.name,
            nickname=user.name,
            email=user.email,
            image=user.image_48,
            urls={**user.image_urls(), "team_url": team_url},
        )

    def extra(self, state: CallbackState) -> Extra:
        return Extra(
            raw_info={"auth": state.auth, "token": state.token, "user": state.user}
        )

    def cleanup(self, state: CallbackState) -> CallbackState:
        state.token = None
        state.auth = None
        state.user = None
        return state
