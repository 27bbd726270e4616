"""Summary sharing over e-mail."""

from .dispatcher import RecipientOutcome, ShareReport, parse_recipients, share_summary
from .mailer import (
    SHARE_SUBJECT,
    MailDeliveryError,
    MailSender,
    SmtpMailConfig,
    SmtpMailer,
    build_share_message,
)

__all__ = [
    "SHARE_SUBJECT",
    "MailDeliveryError",
    "MailSender",
    "RecipientOutcome",
    "ShareReport",
    "SmtpMailConfig",
    "SmtpMailer",
    "build_share_message",
    "parse_recipients",
    "share_summary",
]
