"""
Response classification for waitlist upstreams.

An upstream response is read as text first, then run through an ordered list
of rules. The first rule whose predicate matches produces the outcome, so
HTML error pages are recognised before any status or payload interpretation
happens. Every rule list ends with a catch-all.
"""

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from app.infrastructure.observability.logging import get_logger
from app.models.domain.signup_domain import OutcomeKind, UpstreamOutcome

logger = get_logger(__name__)

HTML_MARKERS = ("<!doctype", "<html")


@dataclass(frozen=True)
class RawResponse:
    """Status code and undecoded body of one upstream response."""

    status_code: int
    text: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def body(self) -> Any:
        """Decoded JSON body. Only call after the undecodable rule has run."""
        return json.loads(self.text)

    def body_dict(self) -> dict:
        data = self.body()
        return data if isinstance(data, dict) else {}


@dataclass(frozen=True)
class ResponseRule:
    name: str
    matches: Callable[[RawResponse], bool]
    classify: Callable[[RawResponse], UpstreamOutcome]


def looks_like_html(text: str) -> bool:
    # Only the document start counts; JSON string fields may echo markup
    head = text.lstrip()[:16].lower()
    return head.startswith(HTML_MARKERS)


def is_undecodable(raw: RawResponse) -> bool:
    try:
        raw.body()
    except ValueError:
        return True
    return False


def always(_raw: RawResponse) -> bool:
    return True


def coerce_position(value: Any) -> int | None:
    """Upstream positions may arrive as ints, floats or numeric strings."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        position = int(value)
    except (TypeError, ValueError):
        return None
    return position if position > 0 else None


def coerce_code(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def transport_rules(upstream_label: str) -> list[ResponseRule]:
    """Rules shared by every upstream: HTML pages and non-JSON bodies degrade."""
    return [
        ResponseRule(
            name="html_document",
            matches=lambda raw: looks_like_html(raw.text),
            classify=lambda raw: UpstreamOutcome(
                kind=OutcomeKind.DEGRADED,
                message=f"{upstream_label} deployment issue - using mock data",
                debug="Received HTML response instead of JSON",
            ),
        ),
        ResponseRule(
            name="undecodable_body",
            matches=is_undecodable,
            classify=lambda raw: UpstreamOutcome(
                kind=OutcomeKind.DEGRADED,
                message="JSON parsing failed - using mock data",
                debug="Could not parse response as JSON",
            ),
        ),
    ]


def classify_response(
    raw: RawResponse, rules: Sequence[ResponseRule], upstream: str
) -> UpstreamOutcome:
    for rule in rules:
        if rule.matches(raw):
            outcome = rule.classify(raw)
            logger.debug(
                "Upstream response classified",
                upstream=upstream,
                rule=rule.name,
                status_code=raw.status_code,
                outcome=outcome.kind.value,
            )
            return outcome

    raise LookupError(f"No response rule matched for {upstream} (missing catch-all)")
