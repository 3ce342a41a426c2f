"""Centralized, typed configuration using pydantic-settings.

Provides a single ``Settings`` class backed by ``.env`` file and environment
variables and a cached ``get_settings()`` accessor.  Policy values are kept as
raw strings here; interpreting them (flag parsing, list splitting, host
validation) is the job of :mod:`instance_policy.policy.store`, so a malformed
value disables one policy instead of failing startup.

IMPORTANT: This module has ZERO imports from the ``instance_policy`` package to
prevent circular imports.  Only stdlib, pydantic, pydantic_settings, and
structlog are used.
"""

from __future__ import annotations

import sys
from functools import lru_cache

import structlog
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Process settings loaded from environment variables and ``.env`` file.

    Every policy field is optional: an unset variable is a legitimate
    "feature disabled" state.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- General ---------------------------------------------------------------
    production: bool = False
    sentry_dsn: str = ""

    # -- Account provisioning / username login ---------------------------------
    auto_email_confirmation: str | None = None
    auto_email_domain: str | None = None

    # -- Outbound mail rewriting -----------------------------------------------
    web_domain: str | None = None
    local_domain: str | None = None
    onion_url: str | None = None

    # -- OAuth consent ---------------------------------------------------------
    trusted_oauth_client_ids: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    The ``@lru_cache`` decorator ensures environment variables are parsed
    exactly once.  Call ``get_settings.cache_clear()`` in tests to reset.

    Returns:
        The process ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)
