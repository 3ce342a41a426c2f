"""Domain enumerations for the interception pipeline."""

from enum import StrEnum


class Hook(StrEnum):
    """Insertion points in the host application's pipeline.

    Each value names one wrapped operation; the pipeline maps a hook to the
    interceptor that decorates it.
    """

    BUILD_ACCOUNT = "build_account"
    CREATE_ACCOUNT = "create_account"
    DISPATCH_ACCOUNT_NOTIFICATIONS = "dispatch_account_notifications"
    FIND_FOR_AUTHENTICATION = "find_for_authentication"
    SKIP_AUTHORIZATION = "skip_authorization"
    COMPOSE_MAIL = "compose_mail"


class PendingNotification(StrEnum):
    """Account notifications queued by the identity subsystem."""

    CONFIRMATION_INSTRUCTIONS = "confirmation_instructions"
    RECONFIRMATION_INSTRUCTIONS = "reconfirmation_instructions"


# Notifications that only exist to challenge an unconfirmed address
CONFIRMATION_NOTIFICATIONS: frozenset[str] = frozenset(
    {
        PendingNotification.CONFIRMATION_INSTRUCTIONS.value,
        PendingNotification.RECONFIRMATION_INSTRUCTIONS.value,
    }
)
