"""
RequestContext Middleware - Adds request tracking to all requests.

Every request gets:
- request_id: Unique ID for request tracing (also returned as X-Request-ID)
- ip_address: Client IP address

Both are stored in request.state and bound to the structlog context, so every
log line emitted while handling the request carries them.
"""

import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import settings
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Add request_id / ip_address to request.state and the log context."""

    async def dispatch(self, request: Request, call_next):
        # Honour an upstream proxy's request ID when present
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        ip_address = self._extract_client_ip(request)
        request.state.ip_address = ip_address

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, ip_address=ip_address)

        logger.debug(
            "Request started",
            method=request.method,
            path=request.url.path,
            user_agent=request.headers.get("user-agent"),
        )

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers["X-Request-ID"] = request_id
        return response

    def _extract_client_ip(self, request: Request) -> str | None:
        """
        Client IP, taken from X-Forwarded-For only when running behind a
        trusted proxy (TRUST_X_FORWARDED_FOR).
        """
        if settings.TRUST_X_FORWARDED_FOR:
            forwarded_for = request.headers.get("x-forwarded-for")
            if forwarded_for:
                # "client, proxy1, proxy2" - first IP is the original client
                return forwarded_for.split(",")[0].strip()

        return request.client.host if request.client else None
