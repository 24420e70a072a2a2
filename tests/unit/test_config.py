import pytest


@pytest.mark.parametrize(
    "overrides,expected",
    [
        ({}, None),
        ({"GOOGLE_APP_SCRIPT": "https://script.test/exec"}, "spreadsheet"),
        ({"WAITLIST_BACKEND_URL": "https://api.test"}, "backend"),
        (
            {"GOOGLE_APP_SCRIPT": "https://script.test/exec", "WAITLIST_BACKEND_URL": "https://api.test"},
            "backend",
        ),
        (
            {
                "WAITLIST_UPSTREAM": "spreadsheet",
                "GOOGLE_APP_SCRIPT": "https://script.test/exec",
                "WAITLIST_BACKEND_URL": "https://api.test",
            },
            "spreadsheet",
        ),
        ({"WAITLIST_UPSTREAM": "spreadsheet", "WAITLIST_BACKEND_URL": "https://api.test"}, None),
    ],
)
def test_upstream_variant_selection(make_settings, overrides, expected):
    assert make_settings(**overrides).upstream_variant() == expected


def test_backend_endpoint_joins_base_and_path(make_settings):
    settings = make_settings(WAITLIST_BACKEND_URL="https://api.test/", WAITLIST_BACKEND_PATH="v2/signups")

    assert settings.backend_endpoint() == "https://api.test/v2/signups"


def test_backend_endpoint_unset(make_settings):
    assert make_settings().backend_endpoint() is None


def test_settings_read_from_environment(monkeypatch):
    from app.config import get_settings

    monkeypatch.setenv("GOOGLE_APP_SCRIPT", "https://script.test/exec")
    monkeypatch.setenv("WAITLIST_FAILURE_MODE", "strict")
    monkeypatch.delenv("WAITLIST_BACKEND_URL", raising=False)
    monkeypatch.delenv("WAITLIST_UPSTREAM", raising=False)

    settings = get_settings()

    assert settings.upstream_variant() == "spreadsheet"
    assert settings.WAITLIST_FAILURE_MODE == "strict"
