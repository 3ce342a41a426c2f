"""Policy Store: turn raw ``Settings`` into four frozen policy bundles.

Each bundle is parsed independently.  An absent value yields a disabled
bundle, and a malformed value yields a disabled bundle plus a warning; in
neither case is an exception raised or another bundle affected.
"""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from instance_policy.config import Settings, get_settings
from instance_policy.policy.models import (
    DEFAULT_EMAIL_DOMAIN,
    EmailSynthesisPolicy,
    MailRewritePolicy,
    PolicyBundles,
    TrustedClientPolicy,
    UsernameLoginPolicy,
)

logger = structlog.get_logger()


def _clean(value: str | None) -> str | None:
    """Strip *value* and collapse blank strings to ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_client_ids(raw: str | None) -> frozenset[str]:
    """Split a comma-delimited client id list, trimming and dropping empties.

    Args:
        raw: The raw environment value, e.g. ``" abc, ,def "``.

    Returns:
        The set of non-empty identifiers.
    """
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def load_email_synthesis_policy(settings: Settings) -> EmailSynthesisPolicy:
    flag = _clean(settings.auto_email_confirmation)
    enabled = flag is not None and flag.lower() == "true"
    domain = _clean(settings.auto_email_domain) or DEFAULT_EMAIL_DOMAIN
    try:
        return EmailSynthesisPolicy(enabled=enabled, domain=domain)
    except ValidationError as exc:
        logger.warning("policy_invalid", policy="email_synthesis", errors=exc.errors())
        return EmailSynthesisPolicy()


def load_username_login_policy(settings: Settings) -> UsernameLoginPolicy:
    domain = _clean(settings.auto_email_domain)
    if domain is None:
        return UsernameLoginPolicy()
    try:
        return UsernameLoginPolicy(enabled=True, domain=domain)
    except ValidationError as exc:
        logger.warning("policy_invalid", policy="username_login", errors=exc.errors())
        return UsernameLoginPolicy()


def load_mail_rewrite_policy(settings: Settings) -> MailRewritePolicy:
    clearnet_host = _clean(settings.web_domain) or _clean(settings.local_domain)
    try:
        return MailRewritePolicy(
            clearnet_host=clearnet_host,
            alt_host=_clean(settings.onion_url),
        )
    except ValidationError as exc:
        logger.warning("policy_invalid", policy="mail_rewrite", errors=exc.errors())
        return MailRewritePolicy()


def load_trusted_client_policy(settings: Settings) -> TrustedClientPolicy:
    return TrustedClientPolicy(trusted_ids=parse_client_ids(settings.trusted_oauth_client_ids))


def load_policies(settings: Settings | None = None) -> PolicyBundles:
    """Build every policy bundle from *settings*.

    Intended to be called exactly once at process startup; the returned
    object is frozen and is passed by reference to each interceptor.

    Args:
        settings: Process settings.  If ``None``, ``get_settings()`` is used.

    Returns:
        The frozen ``PolicyBundles`` aggregate.
    """
    if settings is None:
        settings = get_settings()

    policies = PolicyBundles(
        email_synthesis=load_email_synthesis_policy(settings),
        username_login=load_username_login_policy(settings),
        mail_rewrite=load_mail_rewrite_policy(settings),
        trusted_clients=load_trusted_client_policy(settings),
    )

    logger.info(
        "policies_loaded",
        email_synthesis=policies.email_synthesis.enabled,
        email_domain=policies.email_synthesis.domain,
        username_login=policies.username_login.enabled,
        mail_rewrite=policies.mail_rewrite.active,
        trusted_client_count=len(policies.trusted_clients.trusted_ids),
    )
    if not policies.mail_rewrite.active:
        if policies.mail_rewrite.clearnet_host is None:
            logger.info("mail_rewrite_disabled", reason="clearnet host not configured")
        if policies.mail_rewrite.alt_host is None:
            logger.info("mail_rewrite_disabled", reason="alternate host not configured")
    return policies
