import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from .exceptions import InternalServerError

logger = logging.getLogger("slackauth")


def _describe(request: Request) -> str:
    """`METHOD /path from client`. Query strings stay out: callbacks carry codes."""
    client = request.client.host if request.client else "-"
    return f"{request.method} {request.url.path} from {client}"


def _error_body(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> dict:
    return {
        "success": False,
        "error": {"code": code, "message": message, "details": details or {}},
    }


async def handle_base_api_exception(request, exc):
    line = f"[BaseAPIException] {_describe(request)} -> {exc.status_code} {exc.error_code}: {exc.message}"
    if exc.status_code >= 500:
        logger.error(line)
    else:
        logger.warning(line)
    return JSONResponse(status_code=exc.status_code, content=exc.detail)  # type: ignore[arg-type]


async def handle_http_exception(request, exc):
    line = f"[HTTPException] {_describe(request)} -> {exc.status_code}: {exc.detail}"
    if exc.status_code >= 500:
        tb_str = ''.join(traceback.format_tb(exc.__traceback__))
        logger.error(f"{line}\n\nStack Trace:\n{tb_str}")
    else:
        logger.warning(line)

    # Structured details pass through untouched
    if isinstance(exc.detail, dict) and "error" in exc.detail:  # type: ignore[truthy-bool]
        content = exc.detail  # type: ignore[assignment]
    else:
        content = _error_body("HTTP_ERROR", str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content)


async def handle_validation_error(request, exc):
    logger.warning(f"[ValidationError] {_describe(request)} -> 422: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content=_error_body("VALIDATION_001", "Validation failed", {"errors": exc.errors()}),
    )


async def handle_unexpected_error(request, exc):
    tb_str = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error(
        f"[Unhandled Error] {_describe(request)}\n"
        f"{type(exc).__name__}: {exc}\n\n"
        f"Full Stack Trace:\n{tb_str}"
    )

    internal = InternalServerError()
    return JSONResponse(status_code=internal.status_code, content=internal.detail)  # type: ignore[arg-type]
