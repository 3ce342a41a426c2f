"""Startup entry point for the interception layer.

The host application calls :func:`bootstrap` once while booting.  It:

- Configures **structlog** with JSON rendering (production) or colored
  console output (development), plus the Sentry bridge when a DSN is set
- Loads the four policy bundles from the process environment
- Builds the interceptors around the host's collaborators

The host then passes its original operations to
:meth:`~instance_policy.pipeline.InterceptionPipeline.install`.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from instance_policy.config import Settings, get_settings
from instance_policy.observability.sentry import get_sentry_processor, init_sentry
from instance_policy.pipeline import InterceptionPipeline, build_pipeline
from instance_policy.policy.store import load_policies

logger = structlog.get_logger()

SERVICE_NAME = "instance-policy"


def configure_logging(production: bool = False, sentry_enabled: bool = False) -> None:
    """Configure structlog for production (JSON) or development (console).

    Production mode (*production=True*): JSON rendering at INFO level.
    Development mode: colored console rendering at DEBUG level.

    Args:
        production: Enable production mode if ``True``.
        sentry_enabled: Insert the Sentry processor into the chain.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
    ]
    if sentry_enabled:
        shared_processors.append(get_sentry_processor())
    shared_processors += [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        log_level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        log_level = logging.DEBUG

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service=SERVICE_NAME)


def bootstrap(
    settings: Settings | None = None,
    *,
    repository: Any,
    settings_store: Any,
    registry: Any,
    configure: bool = True,
) -> InterceptionPipeline:
    """Load policies once and build the interception pipeline.

    Args:
        settings: Process settings.  If ``None``, ``get_settings()`` is used.
        repository: Durable account storage (save / reload / has_changes).
        settings_store: Per-account settings store with key-path updates.
        registry: OAuth client registry exposing ``find_by_uid``.
        configure: Configure logging and Sentry; disable when the host owns
            structlog configuration.

    Returns:
        The built ``InterceptionPipeline``.
    """
    if settings is None:
        settings = get_settings()

    if configure:
        sentry_enabled = init_sentry(
            settings.sentry_dsn,
            environment="production" if settings.production else "development",
        )
        configure_logging(production=settings.production, sentry_enabled=sentry_enabled)

    logger.info("bootstrap_starting", production=settings.production)
    policies = load_policies(settings)
    return build_pipeline(
        policies,
        repository=repository,
        settings_store=settings_store,
        registry=registry,
    )
