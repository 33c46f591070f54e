import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from slackauth.config import Settings
from slackauth.core.exceptions import ProviderNotFoundError
from slackauth.providers.oauth.client import SlackOAuthClient
from slackauth.providers.oauth.slack import SlackOAuthProvider
from slackauth.providers.registry import ProviderRegistry
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
)
from slackauth.services.auth_service import AuthService


@pytest.fixture
def strategy():
    strategy = Mock(spec=SlackOAuthProvider)
    strategy.name = "slack"
    strategy.cleanup.side_effect = lambda state: state
    return strategy


@pytest.fixture
def auth_service(strategy):
    return AuthService(ProviderRegistry([strategy]))


def completed_state():
    return CallbackState(
        provider="slack",
        token=Token(access_token="tok1"),
        auth=AuthVerificationRecord(ok=True, user_id="U1"),
    )


class TestAuthService:
    def test_auth_url_delegates_to_strategy(self, auth_service, strategy):
        strategy.build_authorize_url.return_value = "https://slack.com/oauth/authorize?x=1"

        url = auth_service.get_oauth_auth_url("slack", "https://cb", state="s1")

        assert url == "https://slack.com/oauth/authorize?x=1"
        strategy.build_authorize_url.assert_called_once_with(
            "https://cb", scope=None, state="s1", team=None
        )

    def test_unknown_provider(self, auth_service):
        with pytest.raises(ProviderNotFoundError):
            auth_service.get_oauth_auth_url("github", "https://cb")

    def test_failed_callback_skips_assembly(self, auth_service, strategy):
        failed = CallbackState(provider="slack").set_errors(
            CallbackError(kind=ErrorKind.MISSING_CODE, message="No code received")
        )
        strategy.handle_callback = AsyncMock(return_value=failed)

        result = asyncio.run(auth_service.process_oauth_callback("slack", {}, "https://cb"))

        assert result.success is False
        assert [e.kind for e in result.errors] == [ErrorKind.MISSING_CODE]
        strategy.credentials.assert_not_called()
        strategy.info.assert_not_called()
        strategy.uid.assert_not_called()

    def test_successful_callback(self, auth_service, strategy):
        state = completed_state()
        strategy.handle_callback = AsyncMock(return_value=state)
        strategy.uid.return_value = "ann@x.com"
        strategy.credentials.return_value = Credentials(token="tok1")
        strategy.info.return_value = Info(email="ann@x.com")
        strategy.extra.return_value = Extra(raw_info={"auth": None})

        result = asyncio.run(
            auth_service.process_oauth_callback("slack", {"code": "abc"}, "https://cb")
        )

        assert result.success is True
        assert result.auth.provider == "slack"
        assert result.auth.uid == "ann@x.com"
        assert result.auth.credentials.token == "tok1"
        assert result.auth.info.email == "ann@x.com"
        strategy.handle_callback.assert_awaited_once_with({"code": "abc"}, "https://cb")
        strategy.cleanup.assert_called_once_with(state)

    def test_info_fallback_is_not_reported(self, auth_service, strategy):
        state = completed_state()
        strategy.handle_callback = AsyncMock(return_value=state)
        strategy.uid.return_value = None
        strategy.credentials.return_value = Credentials(token="tok1")
        strategy.info.return_value = state
        strategy.extra.return_value = Extra()

        result = asyncio.run(
            auth_service.process_oauth_callback("slack", {"code": "abc"}, "https://cb")
        )

        assert result.success is True
        assert result.auth.info is None
        assert result.auth.uid is None


class TestConfiguredUidField:
    """The uid may be any field of the info record, not only strings."""

    @pytest.fixture
    def slack_client(self):
        client = Mock(spec=SlackOAuthClient)
        client.get_token = AsyncMock(
            return_value=Token(access_token="tok1", other_params={"scope": "identity.basic"})
        )
        client.get = AsyncMock(
            side_effect=[
                ProviderResponse(
                    status_code=200,
                    body={"ok": True, "user_id": "U1", "url": "https://x.slack.com/"},
                ),
                ProviderResponse(
                    status_code=200,
                    body={"ok": True, "user": {"name": "Ann", "image_48": "http://img/48"}},
                ),
            ]
        )
        return client

    def run_login(self, slack_client, uid_field):
        settings = Settings(SLACK_UID_FIELD=uid_field)
        strategy = SlackOAuthProvider(client=slack_client, settings=settings)
        service = AuthService(ProviderRegistry([strategy]))
        return asyncio.run(
            service.process_oauth_callback("slack", {"code": "abc"}, "https://cb")
        )

    def test_mapping_field(self, slack_client):
        result = self.run_login(slack_client, "urls")

        assert result.success is True
        assert result.auth.uid == {
            "image_48": "http://img/48",
            "team_url": "https://x.slack.com/",
        }

    def test_unpopulated_field(self, slack_client):
        result = self.run_login(slack_client, "email")

        assert result.success is True
        assert result.auth.uid is None


class TestProviderRegistry:
    def test_lookup(self, strategy):
        registry = ProviderRegistry([strategy])

        assert registry.get("slack") is strategy
        assert "slack" in registry
        assert "github" not in registry
        assert registry.names() == ["slack"]

    def test_missing(self):
        with pytest.raises(ProviderNotFoundError) as exc_info:
            ProviderRegistry().get("slack")

        assert exc_info.value.status_code == 404
