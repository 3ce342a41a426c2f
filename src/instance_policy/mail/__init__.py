"""Outbound mail: message models and clearnet-to-alternate link rewriting."""

from instance_policy.mail.models import MessagePart, OutboundMessage
from instance_policy.mail.rewriter import OutboundMailRewriter, rewrite_text

__all__ = [
    "MessagePart",
    "OutboundMailRewriter",
    "OutboundMessage",
    "rewrite_text",
]
