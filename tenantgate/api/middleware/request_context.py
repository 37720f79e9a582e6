"""
Request context middleware for request tracing and access logging.

Binds request_id (and later user_id, from the auth dependency) into
structlog contextvars so every event logged while serving the request
carries them.
"""

import time
import uuid
import contextvars

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()

# Context variable for request ID
request_id_ctx: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default=""
)


def get_request_id() -> str:
    """Get current request ID from context."""
    return request_id_ctx.get()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request ID, bind it for logging, log the completed request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_ctx.set(request_id)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000

            logger.info(
                "request.completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
                client_ip=request.client.host if request.client else None,
            )

            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            request_id_ctx.reset(token)
            structlog.contextvars.clear_contextvars()
