# app/models/domain/signup_domain.py
"""
Signup Domain Models
Domain models for waitlist submissions and welcome notifications.
Wire names are camelCase (what the signup wizard and the spreadsheet script
exchange); Python attributes are snake_case.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OutcomeKind(str, Enum):
    """Classification of a single waitlist upstream attempt."""

    ACCEPTED = "accepted"
    ALREADY_REGISTERED = "already_registered"
    REJECTED = "rejected"  # user-correctable validation failure
    FAILED = "failed"  # upstream reported a generic failure
    DEGRADED = "degraded"  # misconfiguration, malformed body or transport error
    UNCONFIGURED = "unconfigured"


@dataclass(frozen=True)
class UpstreamOutcome:
    """Tagged result of interpreting one upstream response."""

    kind: OutcomeKind
    referral_code: str | None = None
    waitlist_position: int | None = None
    message: str | None = None
    debug: str | None = None


class SignupPayload(BaseModel):
    """Signup data collected by the wizard's final step."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    name: str = ""
    email: str = ""
    ai_experience: str = ""
    crypto_experience: str = ""
    copy_trading_interest: str = ""
    ml_trust: str = ""
    twitter_username: str = ""
    retweet_link: str = ""
    referred_by: str | None = None

    def to_wire(self) -> dict:
        """Serialize with the camelCase field names upstreams expect."""
        return self.model_dump(by_alias=True)


class SubmissionResult(BaseModel):
    """Terminal result of resolving one signup payload."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    success: bool
    referral_code: str | None = None
    waitlist_position: int | None = None
    message: str | None = None
    debug: str | None = None
    error: str | None = None
    already_whitelisted: bool | None = None

    # Used by the HTTP layer to pick a status code, never serialized
    outcome: OutcomeKind = Field(default=OutcomeKind.ACCEPTED, exclude=True)


class EmailDispatchRequest(BaseModel):
    """Fields needed to render and send one welcome email."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    email: str
    name: str = ""
    waitlist_position: int
    referral_code: str

    @classmethod
    def from_result(
        cls, payload: SignupPayload, result: SubmissionResult
    ) -> "EmailDispatchRequest":
        return cls(
            email=payload.email,
            name=payload.name,
            waitlist_position=result.waitlist_position,
            referral_code=result.referral_code,
        )


@dataclass(frozen=True)
class DispatchReceipt:
    """Provider acknowledgement for a sent email."""

    email_id: str | None
