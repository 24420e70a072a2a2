"""
Notification Dispatcher
Sends the one-shot welcome email through the Resend API.

dispatch() either returns a DispatchReceipt or raises a NotificationError.
Callers composing it with a submission must treat failures as non-fatal.
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from app.config import Settings
from app.infrastructure.observability.logging import get_logger, log_upstream_call
from app.models.domain.signup_domain import DispatchReceipt, EmailDispatchRequest
from app.services.email_templates import render_welcome_email
from app.services.referral import build_referral_link

logger = get_logger(__name__)


class NotificationError(Exception):
    """Base exception for welcome email errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotificationConfigError(NotificationError):
    """Raised when the email provider credential is missing."""


class NotificationDispatchError(NotificationError):
    """Raised when the provider rejects the email or cannot be reached."""


@dataclass(frozen=True)
class DispatcherConfig:
    api_key: str | None
    api_url: str = "https://api.resend.com/emails"
    sender: str = "Kolplay <welcome@kolplay.xyz>"
    subject: str = "Welcome to Kolplay Early Access Waitlist! 🚀"
    referral_base_url: str = "https://www.kolplay.xyz"
    timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "DispatcherConfig":
        return cls(
            api_key=settings.RESEND_API_KEY,
            api_url=settings.RESEND_API_URL,
            sender=settings.EMAIL_FROM,
            subject=settings.EMAIL_SUBJECT,
            referral_base_url=settings.REFERRAL_BASE_URL,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )


class NotificationDispatcher:
    """Best-effort welcome email sender. No state, no retries."""

    def __init__(self, config: DispatcherConfig, http_client: httpx.AsyncClient | None = None):
        self.config = config
        self._http_client = http_client

    def build_message(self, request: EmailDispatchRequest) -> dict:
        """Build the Resend request body for one recipient."""
        referral_link = build_referral_link(self.config.referral_base_url, request.referral_code)
        return {
            "from": self.config.sender,
            "to": [request.email],
            "subject": self.config.subject,
            "html": render_welcome_email(
                request.name,
                request.waitlist_position,
                request.referral_code,
                referral_link,
            ),
        }

    async def dispatch(self, request: EmailDispatchRequest) -> DispatchReceipt:
        if not self.config.api_key:
            logger.error("RESEND_API_KEY is not set, cannot send welcome email")
            raise NotificationConfigError("Email service not configured")

        logger.info("Sending welcome email", email=request.email)
        message = self.build_message(request)
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

        t0 = time.time()
        try:
            async with self._client() as client:
                response = await client.post(self.config.api_url, json=message, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            # InvalidURL (bad RESEND_API_URL) is not an HTTPError subclass
            log_upstream_call(
                "resend", None, round((time.time() - t0) * 1000, 1), "failed", error=str(e)
            )
            raise NotificationDispatchError(f"Failed to send email: {e}") from e

        latency_ms = round((time.time() - t0) * 1000, 1)

        if not response.is_success:
            log_upstream_call(
                "resend", response.status_code, latency_ms, "failed", error=response.text[:200]
            )
            raise NotificationDispatchError(
                f"Failed to send email: Resend API returned status {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            data = {}

        email_id = data.get("id") if isinstance(data, dict) else None
        log_upstream_call("resend", response.status_code, latency_ms, "sent")
        logger.info("Welcome email sent", email=request.email, email_id=email_id)
        return DispatchReceipt(email_id=email_id)

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return

        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            yield client
