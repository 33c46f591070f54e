import logging
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

load_dotenv("slackauth/.env")

from slackauth import containers
from slackauth.config import settings
from slackauth.core.exceptions import BaseAPIException
from slackauth.core.exception_handlers import (
    handle_base_api_exception,
    handle_http_exception,
    handle_unexpected_error,
    handle_validation_error,
)
from slackauth.core.logging_middleware import LoggingMiddleware
from slackauth.logging_config import setup_logging
from slackauth.routers import auth_router, health_router

setup_logging(settings.LOG_LEVEL, settings.PROVIDER_LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)
app.container = containers.Container()  # type: ignore

app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(BaseAPIException, handle_base_api_exception)
app.add_exception_handler(StarletteHTTPException, handle_http_exception)
app.add_exception_handler(RequestValidationError, handle_validation_error)
app.add_exception_handler(Exception, handle_unexpected_error)


app.include_router(health_router.router)
app.include_router(auth_router.router, prefix=settings.API_V1_STR)

handler = Mangum(app)
