"""Pydantic v2 models for the four startup policy bundles.

All bundles are frozen: they are built once by
:func:`instance_policy.policy.store.load_policies` and shared read-only by
every interceptor for the lifetime of the process.
"""

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_EMAIL_DOMAIN = "mail.lan"

_FORBIDDEN_HOST_CHARS = ("@", "/")


def _validate_host(value: str | None, label: str) -> str | None:
    """Reject host values that cannot be spliced into an address or URL."""
    if value is None:
        return None
    if any(ch.isspace() for ch in value) or any(ch in value for ch in _FORBIDDEN_HOST_CHARS):
        raise ValueError(f"{label} must be a bare host name, got {value!r}")
    return value


class EmailSynthesisPolicy(BaseModel):
    """Synthesize ``handle@domain`` addresses for new accounts."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    domain: str = DEFAULT_EMAIL_DOMAIN

    @field_validator("domain")
    @classmethod
    def domain_must_be_bare_host(cls, v: str) -> str:
        """Ensure the domain is non-empty and contains no separators."""
        if not v:
            raise ValueError("domain must not be empty")
        return _validate_host(v, "domain") or v


class UsernameLoginPolicy(BaseModel):
    """Accept a bare handle where the login form expects an address."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    domain: str = DEFAULT_EMAIL_DOMAIN

    @field_validator("domain")
    @classmethod
    def domain_must_be_bare_host(cls, v: str) -> str:
        """Ensure the domain is non-empty and contains no separators."""
        if not v:
            raise ValueError("domain must not be empty")
        return _validate_host(v, "domain") or v


class MailRewritePolicy(BaseModel):
    """Rewrite clearnet links in outbound mail to an alternate host.

    The policy is only active when both hosts are set.
    """

    model_config = ConfigDict(frozen=True)

    clearnet_host: str | None = None
    alt_host: str | None = None

    @field_validator("clearnet_host", "alt_host")
    @classmethod
    def hosts_must_be_bare(cls, v: str | None) -> str | None:
        """Ensure hosts carry no scheme, path, or whitespace."""
        return _validate_host(v, "host")

    @property
    def active(self) -> bool:
        return bool(self.clearnet_host) and bool(self.alt_host)


class TrustedClientPolicy(BaseModel):
    """OAuth client identifiers exempted from the interactive consent screen."""

    model_config = ConfigDict(frozen=True)

    trusted_ids: frozenset[str] = frozenset()

    @property
    def active(self) -> bool:
        return bool(self.trusted_ids)


class PolicyBundles(BaseModel):
    """The complete, immutable policy set loaded at startup."""

    model_config = ConfigDict(frozen=True)

    email_synthesis: EmailSynthesisPolicy = EmailSynthesisPolicy()
    username_login: UsernameLoginPolicy = UsernameLoginPolicy()
    mail_rewrite: MailRewritePolicy = MailRewritePolicy()
    trusted_clients: TrustedClientPolicy = TrustedClientPolicy()
