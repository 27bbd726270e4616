"""SMTP delivery of shared summaries."""

from __future__ import annotations

import html
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

SHARE_SUBJECT = "Meeting Summary Shared"


@dataclass(slots=True)
class SmtpMailConfig:
    """Account and server used to send mail."""

    username: str
    password: str
    host: str = "smtp.gmail.com"
    port: int = 465
    timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        if not self.username or not self.password:
            raise ValueError("username and password must be provided for SMTP.")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive.")


class MailDeliveryError(RuntimeError):
    """Raised when a message could not be handed to the mail server."""


class MailSender(Protocol):  # pragma: no cover - Protocol runtime helper
    sender: str

    def send(self, message: EmailMessage) -> None: ...


SmtpFactory = Callable[..., smtplib.SMTP]


class SmtpMailer:
    """Opens one SSL session per message."""

    def __init__(
        self,
        config: SmtpMailConfig,
        *,
        smtp_factory: SmtpFactory | None = None,
    ) -> None:
        self.config = config
        self._smtp_factory = smtp_factory or smtplib.SMTP_SSL

    @property
    def sender(self) -> str:
        return self.config.username

    def send(self, message: EmailMessage) -> None:
        try:
            with self._smtp_factory(
                self.config.host,
                self.config.port,
                timeout=self.config.timeout_seconds,
            ) as client:
                client.login(self.config.username, self.config.password)
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(
                f"Failed to deliver mail to {message['To']}: {exc}"
            ) from exc
        logger.debug("Delivered mail to %s", message["To"])


def build_share_message(
    *, sender: str, recipient: str, prompt: str, summary: str
) -> EmailMessage:
    """Compose the HTML mail embedding the stored prompt and the given summary."""
    body = (
        "<h2>Meeting Summary</h2>\n"
        f"<p><strong>Original Prompt:</strong> {html.escape(prompt)}</p>\n"
        "<hr>\n"
        f'<div style="white-space: pre-wrap;">{html.escape(summary)}</div>\n'
        "<hr>\n"
        "<p><em>This summary was generated using AI technology.</em></p>\n"
    )

    message = EmailMessage()
    message["From"] = sender
    message["To"] = recipient
    message["Subject"] = SHARE_SUBJECT
    message.set_content(summary)
    message.add_alternative(body, subtype="html")
    return message


__all__ = [
    "SHARE_SUBJECT",
    "MailDeliveryError",
    "MailSender",
    "SmtpMailConfig",
    "SmtpMailer",
    "build_share_message",
]
