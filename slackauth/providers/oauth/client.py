import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from slackauth.config import Settings
from slackauth.core.exceptions import TransportError
from slackauth.schemas.oauth import ProviderError, ProviderResponse, Token

logger = logging.getLogger(__name__)

# Fields of the exchange response mapped onto Token itself
_TOKEN_FIELDS = ("access_token", "refresh_token", "token_type", "expires_in")


class SlackOAuthClient:
    """HTTP side of the Slack strategy: authorize URL, code exchange and API calls."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = settings.SLACK_CLIENT_ID
        self.client_secret = settings.SLACK_CLIENT_SECRET
        self.auth_url = settings.SLACK_AUTHORIZE_URL
        self.token_url = settings.SLACK_TOKEN_URL
        self.api_base_url = settings.SLACK_API_BASE_URL.rstrip("/")
        self.timeout = settings.OAUTH_HTTP_TIMEOUT_SECONDS
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    def authorize_url(self, params: Dict[str, str]) -> str:
        """Generate Slack OAuth authorization URL"""
        query = {"client_id": self.client_id, "response_type": "code", **params}
        return f"{self.auth_url}?{urlencode(query)}"

    async def get_token(self, code: str, redirect_uri: str) -> Token:
        """Exchange authorization code for access token.

        Slack answers a bad code with `{"ok": false, "error": ...}`; that comes
        back as a Token without access_token and with `provider_error` set.
        """
        try:
            async with self._client() as client:
                response = await client.post(
                    self.token_url,
                    data={
                        "grant_type": "authorization_code",
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "code": code,
                        "redirect_uri": redirect_uri,
                    },
                    headers={
                        "Content-Type": "application/x-www-form-urlencoded",
                        "Accept": "application/json",
                    },
                )
        except httpx.TimeoutException:
            logger.error("Slack OAuth token exchange timeout")
            raise TransportError("timeout")
        except httpx.HTTPError as e:
            logger.error(f"Slack OAuth token exchange failed: {e!r}")
            raise TransportError(str(e) or type(e).__name__)

        data = self._decode(response)
        if response.status_code != 200:
            logger.error(
                f"Slack token exchange returned {response.status_code}: {data.get('error')}"
            )
        return self.build_token(data)

    @staticmethod
    def build_token(data: Dict[str, Any]) -> Token:
        access_token = data.get("access_token") or None
        expires_in = data.get("expires_in")
        expires_at = int(time.time()) + int(expires_in) if expires_in else None
        token = Token(
            access_token=access_token,
            refresh_token=data.get("refresh_token"),
            token_type=data.get("token_type") or "Bearer",
            expires_at=expires_at,
            other_params={k: v for k, v in data.items() if k not in _TOKEN_FIELDS},
        )
        if access_token is None:
            token.provider_error = ProviderError(
                code=data.get("error"), description=data.get("error_description")
            )
        return token

    async def get(
        self, token: Token, path: str, params: Optional[Dict[str, Any]] = None
    ) -> ProviderResponse:
        """Bearer-authenticated GET against the Slack Web API."""
        url = f"{self.api_base_url}/{path.lstrip('/')}"
        try:
            async with self._client() as client:
                response = await client.get(
                    url,
                    params=params,
                    headers={"Authorization": f"Bearer {token.access_token}"},
                )
        except httpx.TimeoutException:
            logger.error(f"Slack API timeout: {path}")
            raise TransportError("timeout")
        except httpx.HTTPError as e:
            logger.error(f"Slack API request failed: {path}: {e!r}")
            raise TransportError(str(e) or type(e).__name__)

        # Error statuses are judged by status alone, their bodies may be HTML
        strict = 200 <= response.status_code < 400
        return ProviderResponse(
            status_code=response.status_code, body=self._decode(response, strict)
        )

    @staticmethod
    def _decode(response: httpx.Response, strict: bool = True) -> Dict[str, Any]:
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            if not strict:
                return {}
            raise TransportError(f"invalid JSON body (status {response.status_code})")
        if not isinstance(body, dict):
            if not strict:
                return {}
            raise TransportError(f"unexpected body type (status {response.status_code})")
        return body
