from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file="slackauth/.env",
        env_file_encoding="utf-8",
        extra="allow",
    )
    # Application
    APP_NAME: str = "Slack Auth API"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PROVIDER_LOG_LEVEL: Optional[str] = None

    # Slack OAuth
    SLACK_CLIENT_ID: str = ""
    SLACK_CLIENT_SECRET: str = ""
    SLACK_AUTHORIZE_URL: str = "https://slack.com/oauth/authorize"
    SLACK_TOKEN_URL: str = "https://slack.com/api/oauth.access"
    SLACK_API_BASE_URL: str = "https://slack.com/api"

    # Strategy options
    SLACK_UID_FIELD: str = "email"  # any field of the info record, urls included
    SLACK_DEFAULT_SCOPE: str = "identity.basic"
    SLACK_TEAM: Optional[str] = None

    OAUTH_HTTP_TIMEOUT_SECONDS: float = 30.0


settings = Settings()
