import json

import httpx
import pytest

from app.config import Settings
from app.models.domain.signup_domain import SignupPayload


@pytest.fixture
def signup_payload() -> SignupPayload:
    return SignupPayload(
        name="Ada",
        email="ada@example.com",
        ai_experience="Beginner",
        crypto_experience="Intermediate",
        copy_trading_interest="Never tried",
        ml_trust="Partially",
        twitter_username="ada",
        retweet_link="https://x.com/ada/status/1",
    )


@pytest.fixture
def make_settings():
    """Build Settings isolated from the process environment and .env.local."""

    def _make(**overrides) -> Settings:
        values = {
            "GOOGLE_APP_SCRIPT": None,
            "WAITLIST_BACKEND_URL": None,
            "RESEND_API_KEY": None,
            "WAITLIST_UPSTREAM": "auto",
            "WAITLIST_FAILURE_MODE": "degraded",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def make_transport():
    def _make(handler) -> RecordingTransport:
        return RecordingTransport(handler)

    return _make


@pytest.fixture
def respond():
    """Handler factory returning a fixed response."""

    def _factory(status_code: int = 200, *, json_body=None, text: str | None = None):
        def _handler(request: httpx.Request) -> httpx.Response:
            if json_body is not None:
                return httpx.Response(status_code, json=json_body)
            return httpx.Response(status_code, text=text or "")

        return _handler

    return _factory


@pytest.fixture
def fail_with():
    """Handler factory raising a transport error."""

    def _factory(exc_type: type[httpx.HTTPError] = httpx.ConnectError):
        def _handler(request: httpx.Request) -> httpx.Response:
            raise exc_type("upstream unreachable", request=request)

        return _handler

    return _factory
