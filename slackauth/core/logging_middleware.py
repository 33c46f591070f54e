import logging
import time
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

logger = logging.getLogger("slackauth")


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.time()
        method = request.method
        # Drop the query string: callback URLs carry authorization codes
        path = request.url.path
        client = request.client.host if request.client else "-"

        logger.info(f"[Request] {method} {path} from {client}")
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"[Unhandled Error] {method} {path} from {client}")
            raise

        duration_ms = (time.time() - start) * 1000
        if response.status_code >= 500:
            logger.error(
                f"[Response] {method} {path} from {client} -> {response.status_code} in {duration_ms:.1f}ms"
            )
        elif response.status_code >= 400:
            logger.warning(
                f"[Response] {method} {path} from {client} -> {response.status_code} in {duration_ms:.1f}ms"
            )
        else:
            logger.info(
                f"[Response] {method} {path} from {client} -> {response.status_code} in {duration_ms:.1f}ms"
            )
        return response
