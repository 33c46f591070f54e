import logging.config
import sys
from typing import Optional


def setup_logging(log_level: str = "INFO", provider_log_level: Optional[str] = None):
    """Configure console logging for the service.

    `provider_log_level` tunes `slackauth.providers` (Slack calls and callback
    failures) separately from the rest of the app. httpx and httpcore are held
    at WARNING because their INFO lines echo full request URLs.
    """
    log_level = log_level.upper()
    provider_log_level = (provider_log_level or log_level).upper()
    handlers = ["console", "error_console"]

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "detailed": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)s\n%(pathname)s:%(lineno)d\n%(message)s",
                },
                "simple": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)-32s | %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "formatter": "simple",
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                },
                "error_console": {
                    "formatter": "detailed",
                    "class": "logging.StreamHandler",
                    "stream": sys.stderr,
                    "level": "WARNING",
                },
            },
            "root": {"handlers": handlers, "level": log_level},
            "loggers": {
                "uvicorn.access": {
                    "handlers": ["console"],
                    "level": log_level,
                    "propagate": False,
                },
                "slackauth": {
                    "handlers": handlers,
                    "level": log_level,
                    "propagate": False,
                },
                "slackauth.providers": {
                    "level": provider_log_level,
                },
                "httpx": {"level": "WARNING"},
                "httpcore": {"level": "WARNING"},
            },
        }
    )
