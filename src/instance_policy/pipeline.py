"""Compose the four interceptors into the host application's pipeline.

Each interceptor exposes ``active`` and ``wrap(operation) -> operation``.
:meth:`InterceptionPipeline.install` takes the host's original callables,
keyed by :class:`~instance_policy.domain.types.Hook`, and returns the wrapped
callables for the host to call instead.  Nothing is patched in place.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from instance_policy.consent.engine import ConsentPolicyEngine
from instance_policy.credentials.resolver import CredentialResolver
from instance_policy.domain.errors import UnknownHookError
from instance_policy.domain.types import Hook
from instance_policy.mail.rewriter import OutboundMailRewriter
from instance_policy.policy.models import PolicyBundles
from instance_policy.provisioning.interceptor import AccountProvisioningInterceptor

logger = structlog.get_logger()


@dataclass(frozen=True)
class InterceptionPipeline:
    """The interceptors built from one set of startup policies."""

    provisioning: AccountProvisioningInterceptor
    credentials: CredentialResolver
    consent: ConsentPolicyEngine
    mail: OutboundMailRewriter

    def _wrappers(self) -> dict[Hook, Callable[[Callable[..., Any]], Callable[..., Any]]]:
        return {
            Hook.BUILD_ACCOUNT: self.provisioning.wrap,
            Hook.CREATE_ACCOUNT: self.provisioning.wrap_create,
            Hook.DISPATCH_ACCOUNT_NOTIFICATIONS: self.provisioning.wrap_notification_dispatch,
            Hook.FIND_FOR_AUTHENTICATION: self.credentials.wrap,
            Hook.SKIP_AUTHORIZATION: self.consent.wrap,
            Hook.COMPOSE_MAIL: self.mail.wrap,
        }

    def wrap(self, hook: Hook | str, operation: Callable[..., Any]) -> Callable[..., Any]:
        """Wrap a single host operation.

        Args:
            hook: The insertion point the operation belongs to.
            operation: The host's original callable.

        Returns:
            The wrapped callable, or *operation* itself when the owning
            interceptor is inactive.

        Raises:
            UnknownHookError: If *hook* is not a known insertion point.
        """
        try:
            key = Hook(hook)
        except ValueError:
            raise UnknownHookError(str(hook)) from None
        return self._wrappers()[key](operation)

    def install(self, hooks: Mapping[Hook | str, Callable[..., Any]]) -> dict[Hook, Callable[..., Any]]:
        """Wrap every supplied host operation.

        Hooks absent from *hooks* are absent from the result.
        """
        installed: dict[Hook, Callable[..., Any]] = {}
        for hook, operation in hooks.items():
            wrapped = self.wrap(hook, operation)
            installed[Hook(hook)] = wrapped
            logger.debug("hook_installed", hook=str(hook), intercepted=wrapped is not operation)
        return installed

    def status(self) -> dict[str, bool]:
        """Return which interceptors are active."""
        return {
            "provisioning": self.provisioning.active,
            "credentials": self.credentials.active,
            "consent": self.consent.active,
            "mail": self.mail.active,
        }


def build_pipeline(
    policies: PolicyBundles,
    *,
    repository: Any,
    settings_store: Any,
    registry: Any,
) -> InterceptionPipeline:
    """Build all interceptors from the startup policies and collaborators.

    Args:
        policies: The frozen policy bundles from ``load_policies()``.
        repository: Durable account storage for provisioning.
        settings_store: Per-account settings store for provisioning.
        registry: OAuth client registry for the consent engine.

    Returns:
        An ``InterceptionPipeline`` ready for :meth:`InterceptionPipeline.install`.
    """
    pipeline = InterceptionPipeline(
        provisioning=AccountProvisioningInterceptor(
            policies.email_synthesis, repository, settings_store
        ),
        credentials=CredentialResolver(policies.username_login),
        consent=ConsentPolicyEngine(policies.trusted_clients, registry),
        mail=OutboundMailRewriter(policies.mail_rewrite),
    )
    logger.info("pipeline_built", **pipeline.status())
    return pipeline
