"""
CORS Middleware - lets the browser-based signup wizard call the API.

The wizard is served from a different origin than this API, so preflight
OPTIONS requests must be answered and allowed origins echoed back.

Usage:
    from app.middleware.cors import CORSMiddleware

    app.add_middleware(CORSMiddleware, allowed_origins=["http://localhost:3000"])
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class CORSMiddleware(BaseHTTPMiddleware):
    """Handles preflight requests and adds CORS headers for allowed origins."""

    def __init__(
        self,
        app,
        allowed_origins: list[str] | None = None,
        allow_methods: list[str] | None = None,
        allow_headers: list[str] | None = None,
        max_age: int = 600,
    ):
        super().__init__(app)
        self.allowed_origins = allowed_origins or []
        self.allow_methods = allow_methods or ["GET", "POST", "OPTIONS"]
        self.allow_headers = allow_headers or ["Accept", "Content-Type", "X-Request-ID"]
        self.max_age = max_age

        logger.info("CORS middleware initialized", allowed_origins=self.allowed_origins)

    async def dispatch(self, request, call_next):
        origin = request.headers.get("origin")
        is_allowed_origin = origin in self.allowed_origins if origin else False

        if request.method == "OPTIONS" and origin:
            if is_allowed_origin:
                return self._preflight_response(origin)

            logger.warning("CORS preflight rejected - origin not allowed", origin=origin)
            return Response(status_code=403, content="Origin not allowed")

        response = await call_next(request)

        if is_allowed_origin:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
        elif origin:
            logger.warning("CORS request from disallowed origin", origin=origin, path=request.url.path)

        return response

    def _preflight_response(self, origin: str) -> Response:
        headers = {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Methods": ", ".join(self.allow_methods),
            "Access-Control-Allow-Headers": ", ".join(self.allow_headers),
            "Access-Control-Max-Age": str(self.max_age),
            "Vary": "Origin",
        }
        return Response(status_code=204, headers=headers)
