"""Shared pytest fixtures for the instance-policy test suite."""

from __future__ import annotations

import pytest
from fakes import FakeClientRegistry, InMemoryAccountRepository, InMemorySettingsStore

from instance_policy.config import get_settings
from instance_policy.policy.models import (
    EmailSynthesisPolicy,
    MailRewritePolicy,
    PolicyBundles,
    TrustedClientPolicy,
    UsernameLoginPolicy,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    """Clear get_settings lru_cache before each test."""
    get_settings.cache_clear()


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def settings_store() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def email_policy() -> EmailSynthesisPolicy:
    return EmailSynthesisPolicy(enabled=True, domain="mail.example")


@pytest.fixture
def login_policy() -> UsernameLoginPolicy:
    return UsernameLoginPolicy(enabled=True, domain="mail.example")


@pytest.fixture
def rewrite_policy() -> MailRewritePolicy:
    return MailRewritePolicy(clearnet_host="host.example", alt_host="xyz.onion")


@pytest.fixture
def trusted_policy() -> TrustedClientPolicy:
    return TrustedClientPolicy(trusted_ids=frozenset({"trusted-1", "trusted-2"}))


@pytest.fixture
def all_policies(
    email_policy: EmailSynthesisPolicy,
    login_policy: UsernameLoginPolicy,
    rewrite_policy: MailRewritePolicy,
    trusted_policy: TrustedClientPolicy,
) -> PolicyBundles:
    """Every policy enabled with representative values."""
    return PolicyBundles(
        email_synthesis=email_policy,
        username_login=login_policy,
        mail_rewrite=rewrite_policy,
        trusted_clients=trusted_policy,
    )


@pytest.fixture
def registry() -> FakeClientRegistry:
    return FakeClientRegistry()
