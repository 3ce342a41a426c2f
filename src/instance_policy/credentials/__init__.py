"""Credential resolution for handle-based login."""

from instance_policy.credentials.resolver import (
    DEFAULT_CRITERIA_FIELD,
    LOGIN_FAILURE_MESSAGES,
    CredentialResolver,
)

__all__ = [
    "DEFAULT_CRITERIA_FIELD",
    "LOGIN_FAILURE_MESSAGES",
    "CredentialResolver",
]
