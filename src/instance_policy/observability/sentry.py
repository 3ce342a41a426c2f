"""Optional Sentry reporting for interceptor failures.

A failed save during account finalization propagates to the host; when a
DSN is configured the corresponding ERROR log event is also forwarded to
Sentry through ``structlog-sentry``.
"""

from __future__ import annotations

import logging

import sentry_sdk
import structlog
from sentry_sdk.integrations.logging import LoggingIntegration
from structlog_sentry import SentryProcessor


def init_sentry(dsn: str, environment: str = "development") -> bool:
    """Initialize the Sentry SDK when *dsn* is non-empty.

    Args:
        dsn: Sentry DSN string.  Empty string disables Sentry.
        environment: Environment tag attached to every event.

    Returns:
        ``True`` if the SDK was initialized.
    """
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        send_default_pii=False,
        # structlog-sentry reports errors; stdlib logging capture would duplicate them
        integrations=[LoggingIntegration(event_level=None, level=None)],
    )
    return True


def get_sentry_processor() -> structlog.types.Processor:
    """Return a structlog processor forwarding ERROR events to Sentry."""
    return SentryProcessor(event_level=logging.ERROR)
