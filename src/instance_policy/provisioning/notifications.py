"""Notification-preference overlay applied to every newly provisioned account.

End-user delivery categories are switched off.  Moderation and safety
categories stay on so staff accounts keep receiving reports and appeals.
"""

from __future__ import annotations

from typing import Any

NOTIFICATION_PREFIX = "notification_emails"

USER_FACING_CATEGORIES: tuple[str, ...] = (
    "follow",
    "reblog",
    "favourite",
    "mention",
    "follow_request",
    "trends",
)

# Categories that remain enabled on every account
MODERATION_CATEGORIES: tuple[str, ...] = ("report", "pending_account", "appeal")

NOTIFICATION_OVERLAY: dict[str, Any] = {
    **{f"{NOTIFICATION_PREFIX}.{name}": False for name in USER_FACING_CATEGORIES},
    **{f"{NOTIFICATION_PREFIX}.{name}": True for name in MODERATION_CATEGORIES},
    # Digest setting is an enum on the host side, not a boolean
    f"{NOTIFICATION_PREFIX}.software_updates": "none",
    "always_send_emails": False,
}
