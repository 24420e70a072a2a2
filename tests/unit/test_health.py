"""
Tests for health check endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.main import app

client = TestClient(app)


@pytest.fixture
def use_settings(make_settings):
    def _use(**overrides):
        app.dependency_overrides[get_settings] = lambda: make_settings(**overrides)

    yield _use
    app.dependency_overrides.clear()


def test_healthz_endpoint():
    """Test the basic health check endpoint."""
    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_readyz_fully_configured(use_settings):
    use_settings(GOOGLE_APP_SCRIPT="https://script.test/exec", RESEND_API_KEY="re_key")

    response = client.get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is True
    assert data["checks"]["waitlist_upstream"]["variant"] == "spreadsheet"
    assert data["checks"]["email_provider"]["ok"] is True


def test_readyz_without_upstream_in_degraded_mode(use_settings):
    """Degraded mode can still serve signups with synthesized data."""
    use_settings()

    data = client.get("/readyz").json()

    assert data["overall_ok"] is True
    assert data["checks"]["waitlist_upstream"]["ok"] is False
    assert data["checks"]["email_provider"]["issues"] == ["RESEND_API_KEY not set"]


def test_readyz_without_upstream_in_strict_mode(use_settings):
    use_settings(WAITLIST_FAILURE_MODE="strict")

    data = client.get("/readyz").json()

    assert data["overall_ok"] is False
    assert data["checks"]["waitlist_upstream"]["failure_mode"] == "strict"
