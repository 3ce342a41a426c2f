"""Tests for Settings and the get_settings cache.

Covers: defaults, env-override, case-insensitive variable names, and
lru_cache behavior.
"""

from __future__ import annotations

import pytest

from instance_policy.config import Settings, get_settings

POLICY_VARS = (
    "AUTO_EMAIL_CONFIRMATION",
    "AUTO_EMAIL_DOMAIN",
    "WEB_DOMAIN",
    "LOCAL_DOMAIN",
    "ONION_URL",
    "TRUSTED_OAUTH_CLIENT_IDS",
    "PRODUCTION",
    "SENTRY_DSN",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in POLICY_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettingsDefaults:
    """Verify that Settings fields have the expected default values."""

    def test_settings_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.production is False
        assert s.sentry_dsn == ""
        assert s.auto_email_confirmation is None
        assert s.auto_email_domain is None
        assert s.web_domain is None
        assert s.local_domain is None
        assert s.onion_url is None
        assert s.trusted_oauth_client_ids is None

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTO_EMAIL_CONFIRMATION", "true")
        monkeypatch.setenv("AUTO_EMAIL_DOMAIN", "mail.example")
        monkeypatch.setenv("WEB_DOMAIN", "social.example")
        monkeypatch.setenv("ONION_URL", "abc.onion")
        monkeypatch.setenv("TRUSTED_OAUTH_CLIENT_IDS", "a,b")
        monkeypatch.setenv("PRODUCTION", "true")

        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.auto_email_confirmation == "true"
        assert s.auto_email_domain == "mail.example"
        assert s.web_domain == "social.example"
        assert s.onion_url == "abc.onion"
        assert s.trusted_oauth_client_ids == "a,b"
        assert s.production is True

    def test_policy_values_are_not_interpreted(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A nonsense flag value loads fine; the policy store decides what it means."""
        monkeypatch.setenv("AUTO_EMAIL_CONFIRMATION", "definitely")

        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.auto_email_confirmation == "definitely"


class TestGetSettingsCached:
    """Verify lru_cache on get_settings."""

    def test_get_settings_cached(self) -> None:
        first = get_settings()
        second = get_settings()

        assert first is second

    def test_get_settings_exits_on_invalid_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRODUCTION", "not-a-bool")

        with pytest.raises(SystemExit) as exc_info:
            get_settings()

        assert exc_info.value.code == 1
