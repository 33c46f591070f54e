from dependency_injector import containers, providers

from slackauth.config import Settings
from slackauth.providers.oauth.client import SlackOAuthClient
from slackauth.providers.oauth.slack import SlackOAuthProvider
from slackauth.providers.registry import ProviderRegistry
from slackauth.services.auth_service import AuthService


class ConfigModule(containers.DeclarativeContainer):
    """Application configuration."""

    config = providers.Singleton(Settings)


class ProviderModule(containers.DeclarativeContainer):
    """OAuth strategies and their HTTP collaborators."""

    config = providers.DependenciesContainer()

    # Override to swap the HTTP/token-exchange collaborator
    slack_client = providers.Singleton(SlackOAuthClient, settings=config.config)
    slack = providers.Singleton(
        SlackOAuthProvider, client=slack_client, settings=config.config
    )
    registry = providers.Singleton(ProviderRegistry, strategies=providers.List(slack))


class ServiceModule(containers.DeclarativeContainer):
    """Service layer dependencies."""

    oauth_providers = providers.DependenciesContainer()

    auth_service = providers.Factory(AuthService, registry=oauth_providers.registry)


class Container(containers.DeclarativeContainer):
    """Application container."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "slackauth.routers.auth_router",
            "slackauth.routers.health_router",
        ],
    )

    config = providers.Container(ConfigModule)
    oauth_providers = providers.Container(ProviderModule, config=config)
    services = providers.Container(ServiceModule, oauth_providers=oauth_providers)
