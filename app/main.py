"""
Kolplay waitlist API: signup submission and welcome email endpoints.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from app.config import settings
from app.infrastructure.observability.logging import get_logger, log_request, setup_logging
from app.middleware import CORSMiddleware, RequestContextMiddleware
from app.routes import health, waitlist

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup configuration. Upstream clients are request-scoped, nothing to open."""
    logger.info(
        "Application starting",
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
        waitlist_upstream=settings.upstream_variant(),
        failure_mode=settings.WAITLIST_FAILURE_MODE,
        email_configured=settings.email_configured(),
    )

    if settings.upstream_variant() is None:
        logger.warning("No waitlist upstream configured, signups will use synthesized data")

    yield

    logger.info("Application shutting down")


app = FastAPI(
    title="Kolplay Waitlist",
    description="Early access waitlist signup with referral codes and welcome emails",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(waitlist.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
    )
    return response


# Last added runs outermost: request context, then CORS, then request logging
app.add_middleware(CORSMiddleware, allowed_origins=settings.CORS_ALLOWED_ORIGINS)
app.add_middleware(RequestContextMiddleware)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
