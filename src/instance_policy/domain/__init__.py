"""Domain types and errors for the interception layer."""

from instance_policy.domain.errors import PolicyError, UnknownHookError
from instance_policy.domain.types import (
    CONFIRMATION_NOTIFICATIONS,
    Hook,
    PendingNotification,
)

__all__ = [
    "CONFIRMATION_NOTIFICATIONS",
    "Hook",
    "PendingNotification",
    "PolicyError",
    "UnknownHookError",
]
