"""Consent Policy Engine: auto-approve OAuth consent for trusted clients."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from instance_policy.policy.models import TrustedClientPolicy

logger = structlog.get_logger()


class ConsentPolicyEngine:
    """Decide whether the interactive consent screen can be skipped.

    The host's default decision (e.g. the first-party app exemption) always
    runs first.  Beyond that, a client whose ``uid`` appears in the trusted
    set is granted consent without prompting the user.

    Args:
        policy: The trusted-client policy bundle.
        registry: Client registry exposing ``find_by_uid(uid)`` which returns
            the client application or ``None``.
    """

    def __init__(self, policy: TrustedClientPolicy, registry: Any) -> None:
        self._policy = policy
        self._registry = registry

    @property
    def active(self) -> bool:
        return self._policy.active

    def resolve_client(self, request: Any) -> Any:
        """Find the requesting client, or ``None`` if it cannot be resolved.

        Uses the request's direct ``client`` reference when present, falling
        back to a registry lookup by ``client_id``.
        """
        client = getattr(request, "client", None)
        if client is not None:
            return client

        client_id = getattr(request, "client_id", None)
        if not client_id:
            return None
        return self._registry.find_by_uid(client_id)

    def is_trusted(self, client: Any) -> bool:
        uid = getattr(client, "uid", None)
        return uid is not None and uid in self._policy.trusted_ids

    def should_skip_consent(
        self,
        request: Any,
        default_decision: Callable[[Any], bool],
    ) -> bool:
        """Return ``True`` when consent may be granted automatically.

        Args:
            request: The pending authorization request.
            default_decision: The host's own skip-consent check.

        Returns:
            ``True`` if the default decision allows it or the client is
            trusted, ``False`` otherwise (including when the client is unknown).
        """
        if default_decision(request):
            return True
        if not self.active:
            return False

        client = self.resolve_client(request)
        if client is None:
            logger.debug("consent_client_unresolved", client_id=getattr(request, "client_id", None))
            return False

        if self.is_trusted(client):
            logger.info(
                "consent_auto_granted",
                client_uid=client.uid,
                client_name=getattr(client, "name", None),
            )
            return True
        return False

    def wrap(self, default_decision: Callable[[Any], bool]) -> Callable[[Any], bool]:
        """Return a wrapper around the host's skip-consent decision."""
        if not self.active:
            return default_decision

        def wrapper(request: Any) -> bool:
            return self.should_skip_consent(request, default_decision)

        return wrapper
