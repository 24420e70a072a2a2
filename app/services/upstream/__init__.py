"""
Waitlist persistence upstreams.

This package contains:
- The ordered response classifier shared by all upstreams
- The spreadsheet-script upstream (fail open)
- The backend-API upstream (fail informative)
"""

from app.services.upstream.backend import BackendUpstream
from app.services.upstream.base import WaitlistUpstream
from app.services.upstream.classifier import RawResponse, ResponseRule, classify_response
from app.services.upstream.spreadsheet import SpreadsheetUpstream

__all__ = [
    "BackendUpstream",
    "RawResponse",
    "ResponseRule",
    "SpreadsheetUpstream",
    "WaitlistUpstream",
    "classify_response",
]
