"""OAuth consent policy for pre-approved client applications."""

from instance_policy.consent.engine import ConsentPolicyEngine

__all__ = ["ConsentPolicyEngine"]
