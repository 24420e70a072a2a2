# app/routes/health.py
"""
Health check endpoints.

Readiness only inspects configuration; it never calls the upstreams, since a
missing or broken upstream degrades signups instead of failing them.
"""

import time

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.models.api.waitlist_response import ReadinessResponse

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "kolplay-waitlist"}


@router.get("/readyz", response_model=ReadinessResponse)
async def readyz(settings: Settings = Depends(get_settings)):
    """
    Readiness check reporting which upstreams this deployment is wired to.
    """
    checks = {}

    # 1) Waitlist upstream
    variant = settings.upstream_variant()
    upstream_issues = []
    if variant is None:
        upstream_issues.append("No waitlist upstream URL set, signups use synthesized data")
    checks["waitlist_upstream"] = {
        "ok": variant is not None,
        "variant": variant,
        "selection": settings.WAITLIST_UPSTREAM,
        "failure_mode": settings.WAITLIST_FAILURE_MODE,
        "issues": upstream_issues or None,
    }

    # 2) Email provider
    checks["email_provider"] = {
        "ok": settings.email_configured(),
        "issues": None if settings.email_configured() else ["RESEND_API_KEY not set"],
    }

    # 3) Environment
    checks["configuration"] = {
        "ok": True,
        "environment": settings.ENVIRONMENT,
        "timeout_seconds": settings.UPSTREAM_TIMEOUT_SECONDS,
    }

    # Degraded mode can serve signups without any upstream
    overall_ok = checks["waitlist_upstream"]["ok"] or settings.WAITLIST_FAILURE_MODE == "degraded"

    return ReadinessResponse(overall_ok=overall_ok, checks=checks, timestamp=time.time())
