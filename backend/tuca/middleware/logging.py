"""
Request correlation and access logging.
"""
import time
import uuid
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Bind a request id to the log context, log every API call with its duration
    and echo the id back in the response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Keep the caller's id when a proxy already assigned one
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None
        )

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "http_request_failed",
                duration_ms=round((time.time() - start_time) * 1000, 2),
                error=str(exc),
                error_type=type(exc).__name__
            )
            raise

        if request.url.path.startswith("/api"):
            logger.info(
                "http_request_completed",
                status_code=response.status_code,
                duration_ms=round((time.time() - start_time) * 1000, 2)
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
