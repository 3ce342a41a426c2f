"""Credential Resolver: let users log in with a bare handle.

When username login is enabled, a login criterion such as
``{"email": "alice"}`` is looked up as ``{"email": "alice@<domain>"}``.  The
lookup receives a transformed copy; the caller's mapping is never touched, so
it still reads ``"alice"`` afterwards (for diagnostics or a retry).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import structlog

from instance_policy.policy.models import UsernameLoginPolicy

logger = structlog.get_logger()

DEFAULT_CRITERIA_FIELD = "email"

# Failure copy shown on the login form once handles are accepted
LOGIN_FAILURE_MESSAGES: dict[str, str] = {
    "invalid": "Invalid username or password.",
    "not_found_in_database": "Invalid username or password.",
}


class CredentialResolver:
    """Map a bare handle to its synthesized address for authentication lookup.

    Args:
        policy: The username-login policy bundle.
        field: Name of the address-like key in the lookup criteria.
    """

    def __init__(self, policy: UsernameLoginPolicy, field: str = DEFAULT_CRITERIA_FIELD) -> None:
        self._policy = policy
        self._field = field

    @property
    def active(self) -> bool:
        return self._policy.enabled

    def failure_messages(self) -> dict[str, str]:
        """Return login failure message overrides, empty when inactive."""
        if not self.active:
            return {}
        return dict(LOGIN_FAILURE_MESSAGES)

    def transform(self, criteria: Any) -> Any:
        """Return the criteria the lookup should actually receive.

        A new mapping is returned when the address field holds a bare handle;
        otherwise *criteria* itself is returned unchanged.
        """
        if not self.active or not isinstance(criteria, Mapping):
            return criteria

        value = criteria.get(self._field)
        if not isinstance(value, str) or not value.strip() or "@" in value:
            return criteria

        transformed = dict(criteria)
        transformed[self._field] = f"{value}@{self._policy.domain}"
        logger.debug("username_login_transformed", handle=value, address=transformed[self._field])
        return transformed

    def resolve(self, criteria: Any, lookup: Callable[[Any], Any]) -> Any:
        """Run *lookup* with bare handles expanded to full addresses.

        Args:
            criteria: Key/value lookup criteria from the login request.
            lookup: The wrapped authentication-lookup step.

        Returns:
            Whatever *lookup* returns (typically the account or ``None``).
        """
        return lookup(self.transform(criteria))

    def wrap(self, lookup: Callable[..., Any]) -> Callable[..., Any]:
        """Return a wrapper around the authentication-lookup step."""
        if not self.active:
            return lookup

        def wrapper(criteria: Any = None, *args: Any, **kwargs: Any) -> Any:
            return lookup(self.transform(criteria), *args, **kwargs)

        return wrapper
