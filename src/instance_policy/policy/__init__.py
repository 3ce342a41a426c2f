"""Policy bundles and the startup Policy Store."""

from instance_policy.policy.models import (
    DEFAULT_EMAIL_DOMAIN,
    EmailSynthesisPolicy,
    MailRewritePolicy,
    PolicyBundles,
    TrustedClientPolicy,
    UsernameLoginPolicy,
)
from instance_policy.policy.store import load_policies, parse_client_ids

__all__ = [
    "DEFAULT_EMAIL_DOMAIN",
    "EmailSynthesisPolicy",
    "MailRewritePolicy",
    "PolicyBundles",
    "TrustedClientPolicy",
    "UsernameLoginPolicy",
    "load_policies",
    "parse_client_ids",
]
