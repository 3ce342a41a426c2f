"""Error reporting bridge for structlog."""

from instance_policy.observability.sentry import get_sentry_processor, init_sentry

__all__ = ["get_sentry_processor", "init_sentry"]
