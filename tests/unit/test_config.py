"""Unit tests for settings."""

from slackguard.config import Settings, get_settings, reset_settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.slack_api_base_url == "https://slack.com/api"
    assert settings.scan_timeout == 300
    assert settings.users_page_size == 200


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SLACK_API_BASE_URL", "http://localhost:9000/api")
    monkeypatch.setenv("SCAN_TIMEOUT", "12.5")

    settings = Settings(_env_file=None)

    assert settings.slack_api_base_url == "http://localhost:9000/api"
    assert settings.scan_timeout == 12.5


def test_settings_singleton():
    reset_settings()
    try:
        assert get_settings() is get_settings()
    finally:
        reset_settings()
