"""Pydantic v2 models for composed outbound mail.

Unlike the policy bundles these models are mutable: the rewriter edits body
text in place between composition and hand-off to the transport layer.
"""

from pydantic import BaseModel


class MessagePart(BaseModel):
    """One content representation of a message (rich or plain)."""

    content_type: str = "text/plain"
    body: str = ""


class OutboundMessage(BaseModel):
    """A fully rendered message awaiting delivery.

    ``html_part`` and ``text_part`` are the alternative representations of a
    multipart message.  A single-part message carries its content in
    ``body`` and leaves both parts unset.
    """

    to: str
    subject: str = ""
    body: str = ""
    html_part: MessagePart | None = None
    text_part: MessagePart | None = None
