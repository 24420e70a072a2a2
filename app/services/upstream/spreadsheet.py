"""
Spreadsheet-script upstream (Google Apps Script web app).

Fail open: any reported failure is degraded to synthesized data instead of
being shown to the user. The script appends a sheet row and answers
`{success, referralCode, waitlistPosition}` or `{success: false, error}`.
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


def _status_failure(raw: RawResponse) -> UpstreamOutcome:
    return UpstreamOutcome(
        kind=OutcomeKind.DEGRADED,
        message="Error occurred - using mock data",
        debug=f"Spreadsheet script returned status {raw.status_code}: {raw.text[:200]}",
    )


def _reported_failure(raw: RawResponse) -> bool:
    return not raw.body_dict().get("success")


def _reported_failure_outcome(raw: RawResponse) -> UpstreamOutcome:
    error = raw.body_dict().get("error") or "Spreadsheet submission failed"
    return UpstreamOutcome(
        kind=OutcomeKind.DEGRADED,
        message="Error occurred - using mock data",
        debug=str(error),
    )


def _accepted(raw: RawResponse) -> UpstreamOutcome:
    data = raw.body_dict()
    return UpstreamOutcome(
        kind=OutcomeKind.ACCEPTED,
        referral_code=coerce_code(data.get("referralCode")),
        waitlist_position=coerce_position(data.get("waitlistPosition")),
    )


class SpreadsheetUpstream(WaitlistUpstream):
    name = "spreadsheet"

    def build_body(self, payload: SignupPayload) -> dict:
        return payload.to_wire()

    def rules(self) -> list[ResponseRule]:
        html_document, undecodable_body = transport_rules("Google Apps Script")
        # Status is checked before the body is decoded
        return [
            html_document,
            ResponseRule("http_error", lambda raw: not raw.is_success, _status_failure),
            undecodable_body,
            ResponseRule("reported_failure", _reported_failure, _reported_failure_outcome),
            ResponseRule("accepted", always, _accepted),
        ]
