"""Account Provisioning Interceptor.

Wraps the host application's account-build and account-create steps so that
new accounts receive a synthesized ``handle@domain`` address, skip the
address-confirmation challenge, and start with end-user notification mail
switched off.

Collaborators are duck-typed, matching the host application's objects:

- *draft / account*: ``handle`` and ``address`` (``str | None``),
  ``confirmed_at`` (``datetime | None``), a ``persisted`` flag, and a
  ``skip_confirmation()`` method marking the account pre-confirmed.
- *repository*: ``has_changes(account) -> bool``, ``save(account)`` (raises on
  failure), and ``reload(account) -> account``.
- *settings_store*: ``update(account, values)`` with key-path semantics,
  e.g. ``{"notification_emails.follow": False}``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

import structlog

from instance_policy.domain.types import CONFIRMATION_NOTIFICATIONS
from instance_policy.policy.models import EmailSynthesisPolicy
from instance_policy.provisioning.notifications import NOTIFICATION_OVERLAY

logger = structlog.get_logger()

# Form field carrying a caller-supplied address in the build params
REQUESTED_ADDRESS_KEY = "email"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _present(value: Any) -> bool:
    """True for a string holding something other than whitespace."""
    return isinstance(value, str) and bool(value.strip())


class AccountProvisioningInterceptor:
    """Address synthesis, confirmation skip, and notification defaults.

    Args:
        policy: The email-synthesis policy bundle.
        repository: Durable account storage (see module docstring).
        settings_store: Per-account settings store (see module docstring).
        clock: Returns the current time; used for ``confirmed_at``.
    """

    def __init__(
        self,
        policy: EmailSynthesisPolicy,
        repository: Any,
        settings_store: Any,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._policy = policy
        self._repository = repository
        self._settings_store = settings_store
        self._clock = clock or _utcnow

    @property
    def active(self) -> bool:
        return self._policy.enabled

    def synthesize_address(self, handle: str) -> str:
        """Return ``handle@domain`` for the configured domain."""
        return f"{handle}@{self._policy.domain}"

    def provision(self, draft: Any, requested_address: str | None = None) -> Any:
        """Post-process a freshly built account draft.

        Fills an empty address from the handle, overrides a caller-supplied
        address with the synthesized one, and marks an unsaved draft as
        pre-confirmed.  A draft without a handle keeps whatever address it has,
        leaving validation to the host application.

        Args:
            draft: The draft produced by the wrapped build step.
            requested_address: The address the caller submitted, if any.

        Returns:
            The same *draft*, modified in place.
        """
        if not self.active:
            return draft

        handle = draft.handle
        if _present(handle):
            synthesized = self.synthesize_address(handle)
            if not _present(draft.address):
                draft.address = synthesized
                logger.info("address_synthesized", handle=handle)
                logger.debug("address_synthesized_value", address=synthesized)
            elif _present(requested_address) and draft.address != synthesized:
                draft.address = synthesized
                logger.info("address_overridden", handle=handle)
                logger.debug("address_overridden_value", address=synthesized)

        if not draft.persisted:
            draft.skip_confirmation()
        return draft

    def finalize(self, account: Any) -> Any:
        """Settle a newly persisted account.

        Re-asserts confirmation, saves pending changes, reloads the account
        from storage, and applies :data:`NOTIFICATION_OVERLAY`.  Storage errors
        are not caught: a half-provisioned account must fail loudly.  Running
        this twice on the same account leaves the same persisted state.

        Args:
            account: A persisted account.

        Returns:
            The account as reloaded from storage.
        """
        if not self.active:
            return account

        account.skip_confirmation()
        if account.confirmed_at is None:
            account.confirmed_at = self._clock()
        if self._repository.has_changes(account):
            self._repository.save(account)

        account = self._repository.reload(account)

        try:
            self._settings_store.update(account, dict(NOTIFICATION_OVERLAY))
            self._repository.save(account)
        except Exception:
            logger.exception("notification_overlay_failed", handle=account.handle)
            raise

        logger.info("account_finalized", handle=account.handle)
        return account

    def suppress_confirmation_notifications(self, pending: Iterable[Any]) -> list[Any]:
        """Drop confirmation-challenge mail from a pending notification queue.

        Entries are either a notification name or a tuple whose first element
        is the name.  Other notifications are kept in order.
        """
        kept: list[Any] = []
        for entry in pending:
            name = entry[0] if isinstance(entry, tuple) else entry
            if name in CONFIRMATION_NOTIFICATIONS:
                logger.info("confirmation_notification_suppressed", notification=str(name))
                continue
            kept.append(entry)
        return kept

    def wrap(self, build_step: Callable[..., Any]) -> Callable[..., Any]:
        """Return a wrapper around the account-build step.

        The build step is called first; its draft is then passed through
        :meth:`provision`, with the requested address taken from
        ``params["email"]``.  Returns *build_step* itself when the policy is
        disabled.
        """
        if not self.active:
            return build_step

        def wrapper(params: Mapping[str, Any] | None = None, *args: Any, **kwargs: Any) -> Any:
            draft = build_step(params, *args, **kwargs)
            requested = params.get(REQUESTED_ADDRESS_KEY) if params else None
            return self.provision(draft, requested_address=requested)

        return wrapper

    def wrap_create(self, create_step: Callable[..., Any]) -> Callable[..., Any]:
        """Return a wrapper that finalizes the account the create step persisted."""
        if not self.active:
            return create_step

        def wrapper(*args: Any, **kwargs: Any) -> Any:
            account = create_step(*args, **kwargs)
            if account is not None and account.persisted:
                return self.finalize(account)
            return account

        return wrapper

    def wrap_notification_dispatch(self, dispatch: Callable[..., Any]) -> Callable[..., Any]:
        """Return a wrapper that filters confirmation mail before dispatch."""
        if not self.active:
            return dispatch

        def wrapper(pending: Iterable[Any], *args: Any, **kwargs: Any) -> Any:
            return dispatch(self.suppress_confirmation_notifications(pending), *args, **kwargs)

        return wrapper
