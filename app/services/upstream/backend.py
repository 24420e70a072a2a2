"""
Backend-API upstream (REST waitlist service).

Fail informative: validation errors (400) are shown to the user verbatim,
duplicates (409) count as success, and other upstream statuses are reported
as a generic failure. Transport and parsing problems still degrade.

Response shape: `{message, data: {email, inviteCode: [code, ...], position}}`.
"""

from app.models.domain.signup_domain import OutcomeKind, SignupPayload, UpstreamOutcome
from app.services.upstream.base import WaitlistUpstream
from app.services.upstream.classifier import (
    RawResponse,
    ResponseRule,
    always,
    coerce_code,
    coerce_position,
    transport_rules,
)

EMAIL_REQUIRED_MESSAGE = "Email is required"
EMAIL_INVALID_MESSAGE = "Please enter a valid email address"
ALREADY_REGISTERED_MESSAGE = "You're already on the waitlist!"
GENERIC_FAILURE_MESSAGE = "Failed to join the waitlist. Please try again later."


def _entry_fields(raw: RawResponse) -> tuple[str | None, int | None, str | None]:
    body = raw.body_dict()
    data = body.get("data")
    data = data if isinstance(data, dict) else {}

    invite_codes = data.get("inviteCode")
    if isinstance(invite_codes, list):
        referral_code = next((c for c in map(coerce_code, invite_codes) if c), None)
    else:
        referral_code = coerce_code(invite_codes)

    message = body.get("message")
    return (
        referral_code,
        coerce_position(data.get("position")),
        message if isinstance(message, str) else None,
    )


def _created(raw: RawResponse) -> UpstreamOutcome:
    referral_code, position, message = _entry_fields(raw)
    return UpstreamOutcome(
        kind=OutcomeKind.ACCEPTED,
        referral_code=referral_code,
        waitlist_position=position,
        message=message,
    )


def _conflict(raw: RawResponse) -> UpstreamOutcome:
    referral_code, position, message = _entry_fields(raw)
    return UpstreamOutcome(
        kind=OutcomeKind.ALREADY_REGISTERED,
        referral_code=referral_code,
        waitlist_position=position,
        message=message or ALREADY_REGISTERED_MESSAGE,
    )


def _bad_request(raw: RawResponse) -> UpstreamOutcome:
    _, _, message = _entry_fields(raw)
    return UpstreamOutcome(kind=OutcomeKind.REJECTED, message=message or GENERIC_FAILURE_MESSAGE)


def _other_failure(raw: RawResponse) -> UpstreamOutcome:
    _, _, message = _entry_fields(raw)
    return UpstreamOutcome(
        kind=OutcomeKind.FAILED,
        message=GENERIC_FAILURE_MESSAGE,
        debug=f"Backend returned status {raw.status_code}: {message or raw.text[:200]}",
    )


class BackendUpstream(WaitlistUpstream):
    name = "backend"

    def __init__(self, url: str, payload_field: str = "user"):
        super().__init__(url)
        self.payload_field = payload_field

    def validate(self, payload: SignupPayload) -> UpstreamOutcome | None:
        email = payload.email.strip()
        if not email:
            return UpstreamOutcome(kind=OutcomeKind.REJECTED, message=EMAIL_REQUIRED_MESSAGE)
        if "@" not in email:
            return UpstreamOutcome(kind=OutcomeKind.REJECTED, message=EMAIL_INVALID_MESSAGE)
        return None

    def build_body(self, payload: SignupPayload) -> dict:
        return {self.payload_field: payload.to_wire()}

    def rules(self) -> list[ResponseRule]:
        return [
            *transport_rules("Waitlist backend"),
            ResponseRule("created", lambda raw: raw.is_success, _created),
            ResponseRule("conflict", lambda raw: raw.status_code == 409, _conflict),
            ResponseRule("bad_request", lambda raw: raw.status_code == 400, _bad_request),
            ResponseRule("other_failure", always, _other_failure),
        ]
