"""Account provisioning: address synthesis, pre-confirmation, notification defaults."""

from instance_policy.provisioning.interceptor import AccountProvisioningInterceptor
from instance_policy.provisioning.notifications import (
    MODERATION_CATEGORIES,
    NOTIFICATION_OVERLAY,
    USER_FACING_CATEGORIES,
)

__all__ = [
    "MODERATION_CATEGORIES",
    "NOTIFICATION_OVERLAY",
    "USER_FACING_CATEGORIES",
    "AccountProvisioningInterceptor",
]
