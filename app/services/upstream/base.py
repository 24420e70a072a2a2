"""
Common interface for waitlist persistence upstreams.
"""

from abc import ABC, abstractmethod

import httpx

from app.models.domain.signup_domain import SignupPayload, UpstreamOutcome
from app.services.upstream.classifier import RawResponse, ResponseRule, classify_response


class WaitlistUpstream(ABC):
    """
    One configured persistence upstream.

    Subclasses define the wire format (`build_body`), the response rules and,
    optionally, a local validation step run before any network call.
    """

    name: str = "upstream"

    def __init__(self, url: str):
        self.url = url

    def validate(self, payload: SignupPayload) -> UpstreamOutcome | None:
        """Return an outcome to short-circuit the call, or None to proceed."""
        return None

    @abstractmethod
    def build_body(self, payload: SignupPayload) -> dict:
        """Request body sent to the upstream."""

    @abstractmethod
    def rules(self) -> list[ResponseRule]:
        """Ordered response rules, ending with a catch-all."""

    async def send(self, client: httpx.AsyncClient, payload: SignupPayload) -> RawResponse:
        response = await client.post(
            self.url,
            json=self.build_body(payload),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
        return RawResponse(status_code=response.status_code, text=response.text)

    def classify(self, raw: RawResponse) -> UpstreamOutcome:
        return classify_response(raw, self.rules(), self.name)
