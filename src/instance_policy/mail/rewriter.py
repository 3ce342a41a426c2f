"""Outbound Mail Rewriter: point links in outgoing mail at an alternate host.

Runs after a message is fully rendered and before it reaches the transport
layer.  Substitution is literal: ``https://<clearnet>`` and then
``http://<clearnet>`` become ``http://<alt>``.  No URL parsing takes place,
so any occurrence of a scheme-prefixed clearnet host is rewritten, including
inside unrelated text.  A bare host without a scheme is left alone.
"""

from __future__ import annotations

from collections.abc import Callable
from email.message import EmailMessage
from typing import Any

import structlog

from instance_policy.policy.models import MailRewritePolicy

logger = structlog.get_logger()

# Representations rewritten, in order; plain text follows rich text
_MIME_ORDER = ("text/html", "text/plain")


def rewrite_text(text: str, clearnet_host: str, alt_host: str) -> str:
    """Replace clearnet links in *text* with links to *alt_host*.

    The secure scheme is replaced first so that ``https://`` never leaves a
    stray ``s`` behind.

    Args:
        text: The rendered body text.
        clearnet_host: Host to replace, e.g. ``"example.social"``.
        alt_host: Replacement host, e.g. ``"abc123.onion"``.

    Returns:
        The rewritten text.
    """
    target = f"http://{alt_host}"
    return text.replace(f"https://{clearnet_host}", target).replace(
        f"http://{clearnet_host}", target
    )


class OutboundMailRewriter:
    """Rewrite clearnet URLs in every content representation of a message.

    Args:
        policy: The mail-rewrite policy bundle.
    """

    def __init__(self, policy: MailRewritePolicy) -> None:
        self._policy = policy

    @property
    def active(self) -> bool:
        return self._policy.active

    def rewrite_text(self, text: str) -> str:
        if not self.active or not text:
            return text
        return rewrite_text(text, self._policy.clearnet_host or "", self._policy.alt_host or "")

    def rewrite(self, message: Any) -> Any:
        """Rewrite a composed message in place.

        The rich part is handled, then the plain part.  When the message has
        neither, the top-level ``body`` is rewritten instead.  Works with
        :class:`~instance_policy.mail.models.OutboundMessage` or any object
        exposing the same ``html_part`` / ``text_part`` / ``body`` attributes.

        Args:
            message: The rendered message.

        Returns:
            The same *message*.
        """
        if not self.active:
            return message

        html_part = getattr(message, "html_part", None)
        text_part = getattr(message, "text_part", None)
        rewritten: list[str] = []

        if html_part is not None:
            html_part.body = self.rewrite_text(html_part.body or "")
            rewritten.append("html")
        if text_part is not None:
            text_part.body = self.rewrite_text(text_part.body or "")
            rewritten.append("text")
        if html_part is None and text_part is None:
            message.body = self.rewrite_text(message.body or "")
            rewritten.append("body")

        logger.debug("mail_rewritten", representations=rewritten)
        return message

    def rewrite_mime(self, message: EmailMessage) -> EmailMessage:
        """Rewrite a stdlib ``EmailMessage`` in place.

        Every non-attachment ``text/html`` leaf is rewritten, then every
        ``text/plain`` leaf, keeping its charset.  A single-part message is
        its own leaf.  The message must use the ``email.policy.default``
        content API.
        """
        if not self.active:
            return message

        leaves = [
            part
            for part in message.walk()
            if not part.is_multipart()
            and part.get_content_type() in _MIME_ORDER
            and not part.is_attachment()
        ]
        leaves.sort(key=lambda part: _MIME_ORDER.index(part.get_content_type()))

        for part in leaves:
            original = part.get_content()
            updated = self.rewrite_text(original)
            if updated == original:
                continue
            had_version = "MIME-Version" in part
            part.set_content(
                updated,
                subtype=part.get_content_subtype(),
                charset=part.get_content_charset() or "utf-8",
            )
            # EmailMessage.set_content stamps MIME-Version on nested parts too
            if part is not message and not had_version:
                del part["MIME-Version"]

        logger.debug("mime_mail_rewritten", parts=len(leaves))
        return message

    def wrap(self, compose: Callable[..., Any]) -> Callable[..., Any]:
        """Return a wrapper that rewrites whatever *compose* renders.

        ``EmailMessage`` results go through :meth:`rewrite_mime`; anything else
        through :meth:`rewrite`.
        """
        if not self.active:
            return compose

        def wrapper(*args: Any, **kwargs: Any) -> Any:
            message = compose(*args, **kwargs)
            if isinstance(message, EmailMessage):
                return self.rewrite_mime(message)
            return self.rewrite(message)

        return wrapper
