"""
Tests for upstream response classification (rule ordering and per-variant mapping).
"""

import json

import pytest

from app.models.domain.signup_domain import OutcomeKind
from app.services.upstream import BackendUpstream, RawResponse, SpreadsheetUpstream, WaitlistUpstream
from app.services.upstream.classifier import (
    ResponseRule,
    classify_response,
    coerce_position,
    looks_like_html,
)

HTML_PAGE = "<!DOCTYPE html><html><body>Script function not found: doPost</body></html>"


def _json(status_code: int, body) -> RawResponse:
    return RawResponse(status_code=status_code, text=json.dumps(body))


@pytest.fixture
def spreadsheet():
    return SpreadsheetUpstream("https://script.google.com/macros/s/abc/exec")


@pytest.fixture
def backend():
    return BackendUpstream("https://api.example.com/api/v1/waitlist")


def test_looks_like_html_detects_documents_case_insensitively():
    assert looks_like_html(HTML_PAGE)
    assert looks_like_html("<HTML><HEAD></HEAD></HTML>")
    assert not looks_like_html('{"success": true}')
    assert looks_like_html("\n  <!doctype html><html></html>")


def test_looks_like_html_ignores_markup_inside_json():
    assert not looks_like_html('{"message": "Invalid name <html>"}')


def test_backend_bad_request_echoing_markup_is_rejected(backend):
    outcome = backend.classify(_json(400, {"message": "Name <html> is not allowed"}))

    assert outcome.kind == OutcomeKind.REJECTED
    assert outcome.message == "Name <html> is not allowed"


def test_spreadsheet_http_error_with_plain_text_body_degrades_as_error(spreadsheet):
    outcome = spreadsheet.classify(RawResponse(status_code=500, text="Internal error"))

    assert outcome.kind == OutcomeKind.DEGRADED
    assert outcome.message == "Error occurred - using mock data"
    assert "500" in outcome.debug


def test_upstream_base_class_cannot_be_instantiated():
    with pytest.raises(TypeError):
        WaitlistUpstream("https://example.com")


@pytest.mark.parametrize("value,expected", [(42, 42), ("17", 17), (3.0, 3), (0, None), (-5, None), (True, None), ("abc", None), (None, None)])
def test_coerce_position(value, expected):
    assert coerce_position(value) == expected


def test_html_rule_wins_over_status_rules(backend):
    # A 409 with an HTML body is still a deployment problem, not a duplicate
    outcome = backend.classify(RawResponse(status_code=409, text=HTML_PAGE))

    assert outcome.kind == OutcomeKind.DEGRADED
    assert outcome.debug == "Received HTML response instead of JSON"


def test_undecodable_body_degrades(spreadsheet):
    outcome = spreadsheet.classify(RawResponse(status_code=200, text="not json at all"))

    assert outcome.kind == OutcomeKind.DEGRADED
    assert outcome.message == "JSON parsing failed - using mock data"


def test_spreadsheet_success_extracts_fields(spreadsheet):
    outcome = spreadsheet.classify(
        _json(200, {"success": True, "referralCode": "QWERTY", "waitlistPosition": 12})
    )

    assert outcome.kind == OutcomeKind.ACCEPTED
    assert outcome.referral_code == "QWERTY"
    assert outcome.waitlist_position == 12


def test_spreadsheet_success_with_missing_fields_leaves_them_empty(spreadsheet):
    outcome = spreadsheet.classify(_json(200, {"success": True}))

    assert outcome.kind == OutcomeKind.ACCEPTED
    assert outcome.referral_code is None
    assert outcome.waitlist_position is None


def test_spreadsheet_reported_failure_degrades(spreadsheet):
    outcome = spreadsheet.classify(_json(200, {"success": False, "error": "Sheet not found"}))

    assert outcome.kind == OutcomeKind.DEGRADED
    assert outcome.debug == "Sheet not found"


def test_spreadsheet_http_error_degrades(spreadsheet):
    outcome = spreadsheet.classify(_json(500, {"error": "boom"}))

    assert outcome.kind == OutcomeKind.DEGRADED
    assert "500" in outcome.debug


def test_spreadsheet_non_object_json_degrades(spreadsheet):
    outcome = spreadsheet.classify(_json(200, ["unexpected"]))

    assert outcome.kind == OutcomeKind.DEGRADED


def test_backend_created_uses_first_invite_code(backend):
    outcome = backend.classify(
        _json(
            200,
            {
                "message": "Added to waitlist",
                "data": {"email": "ada@example.com", "inviteCode": ["ZX81AB", "OTHER1"], "position": 57},
            },
        )
    )

    assert outcome.kind == OutcomeKind.ACCEPTED
    assert outcome.referral_code == "ZX81AB"
    assert outcome.waitlist_position == 57
    assert outcome.message == "Added to waitlist"


def test_backend_conflict_is_already_registered(backend):
    outcome = backend.classify(
        _json(409, {"message": "Already whitelisted", "data": {"inviteCode": ["OLD123"], "position": 3}})
    )

    assert outcome.kind == OutcomeKind.ALREADY_REGISTERED
    assert outcome.referral_code == "OLD123"
    assert outcome.waitlist_position == 3


def test_backend_bad_request_surfaces_message_verbatim(backend):
    outcome = backend.classify(_json(400, {"message": "Twitter username is required"}))

    assert outcome.kind == OutcomeKind.REJECTED
    assert outcome.message == "Twitter username is required"


def test_backend_other_status_is_generic_failure(backend):
    outcome = backend.classify(_json(503, {"message": "db down"}))

    assert outcome.kind == OutcomeKind.FAILED
    assert outcome.message == "Failed to join the waitlist. Please try again later."
    assert "503" in outcome.debug


def test_classify_response_requires_catch_all():
    rules = [ResponseRule("never", lambda raw: False, lambda raw: None)]

    with pytest.raises(LookupError):
        classify_response(RawResponse(status_code=200, text="{}"), rules, "test")
