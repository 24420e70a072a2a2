"""
Submission Resolver
Turns a signup payload into a SubmissionResult through exactly one call to
the configured waitlist upstream.

resolve() never raises. Validation failures are returned as success=False;
infrastructure failures (no upstream, HTML error page, malformed JSON,
network error) are masked behind synthesized data unless the resolver runs
in strict mode.
"""

import random
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Literal

import httpx

from app.config import Settings
from app.infrastructure.observability.logging import get_logger, log_upstream_call
from app.models.domain.signup_domain import (
    OutcomeKind,
    SignupPayload,
    SubmissionResult,
    UpstreamOutcome,
)
from app.services.referral import generate_referral_code, placeholder_position
from app.services.upstream import BackendUpstream, SpreadsheetUpstream, WaitlistUpstream

logger = get_logger(__name__)

UNCONFIGURED_MESSAGE = "Development mode - waitlist upstream not configured"
UNEXPECTED_ERROR_MESSAGE = "Error occurred - using mock data"
STRICT_UNAVAILABLE_MESSAGE = "Waitlist is temporarily unavailable. Please try again later."

# Outcomes that represent infrastructure problems rather than upstream answers
MASKABLE_OUTCOMES = {OutcomeKind.DEGRADED, OutcomeKind.UNCONFIGURED}


@dataclass(frozen=True)
class ResolverConfig:
    """Explicit resolver configuration, built once per request."""

    upstream: WaitlistUpstream | None
    timeout: float = 10.0
    failure_mode: Literal["degraded", "strict"] = "degraded"

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResolverConfig":
        variant = settings.upstream_variant()
        upstream: WaitlistUpstream | None = None

        if variant == "backend":
            upstream = BackendUpstream(
                settings.backend_endpoint(),
                payload_field=settings.WAITLIST_BACKEND_PAYLOAD_FIELD,
            )
        elif variant == "spreadsheet":
            upstream = SpreadsheetUpstream(settings.GOOGLE_APP_SCRIPT)
        elif settings.WAITLIST_UPSTREAM != "auto":
            logger.error(
                "Waitlist upstream selected but its URL is not set",
                waitlist_upstream=settings.WAITLIST_UPSTREAM,
            )

        return cls(
            upstream=upstream,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            failure_mode=settings.WAITLIST_FAILURE_MODE,
        )


class SubmissionResolver:
    """
    Resolves signup payloads against one waitlist upstream.

    Args:
        config: Upstream selection, timeout and failure mode
        http_client: Optional shared client (tests inject a mock transport);
            when omitted a short-lived client is opened per call
        rng: Randomness source for synthesized codes and positions
    """

    def __init__(
        self,
        config: ResolverConfig,
        http_client: httpx.AsyncClient | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self._http_client = http_client
        self._rng = rng

    async def resolve(self, payload: SignupPayload) -> SubmissionResult:
        try:
            outcome = await self._attempt(payload)
        except Exception as e:
            logger.error(
                "Waitlist submission error",
                upstream=self._upstream_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            outcome = UpstreamOutcome(
                kind=OutcomeKind.DEGRADED,
                message=UNEXPECTED_ERROR_MESSAGE,
                debug=str(e) or type(e).__name__,
            )

        result = self._to_result(outcome)
        logger.info(
            "Waitlist submission resolved",
            upstream=self._upstream_name,
            outcome=result.outcome.value,
            success=result.success,
            email=payload.email,
        )
        return result

    @property
    def _upstream_name(self) -> str:
        return self.config.upstream.name if self.config.upstream else "none"

    async def _attempt(self, payload: SignupPayload) -> UpstreamOutcome:
        upstream = self.config.upstream
        if upstream is None:
            logger.warning("No waitlist upstream configured, synthesizing result")
            return UpstreamOutcome(kind=OutcomeKind.UNCONFIGURED, message=UNCONFIGURED_MESSAGE)

        rejection = upstream.validate(payload)
        if rejection is not None:
            logger.info("Signup rejected by validation", upstream=upstream.name, reason=rejection.message)
            return rejection

        t0 = time.time()
        try:
            async with self._client() as client:
                raw = await upstream.send(client, payload)
        except httpx.HTTPError as e:
            log_upstream_call(
                upstream.name,
                None,
                round((time.time() - t0) * 1000, 1),
                OutcomeKind.DEGRADED.value,
                error=f"{type(e).__name__}: {e}",
            )
            raise

        outcome = upstream.classify(raw)
        log_upstream_call(
            upstream.name,
            raw.status_code,
            round((time.time() - t0) * 1000, 1),
            outcome.kind.value,
            error=outcome.debug,
        )
        return outcome

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return

        # Apps Script web apps answer POSTs with a redirect to the result
        async with httpx.AsyncClient(timeout=self.config.timeout, follow_redirects=True) as client:
            yield client

    def _to_result(self, outcome: UpstreamOutcome) -> SubmissionResult:
        if outcome.kind in MASKABLE_OUTCOMES and self.config.failure_mode == "strict":
            return SubmissionResult(
                success=False,
                message=STRICT_UNAVAILABLE_MESSAGE,
                error=outcome.debug or outcome.message,
                outcome=outcome.kind,
            )

        if outcome.kind in (OutcomeKind.REJECTED, OutcomeKind.FAILED):
            return SubmissionResult(
                success=False,
                message=outcome.message,
                error=outcome.debug,
                outcome=outcome.kind,
            )

        # Accepted, already registered or masked: fill any missing field
        return SubmissionResult(
            success=True,
            referral_code=outcome.referral_code or generate_referral_code(self._rng),
            waitlist_position=outcome.waitlist_position or placeholder_position(self._rng),
            message=outcome.message,
            debug=outcome.debug,
            already_whitelisted=True if outcome.kind == OutcomeKind.ALREADY_REGISTERED else None,
            outcome=outcome.kind,
        )
