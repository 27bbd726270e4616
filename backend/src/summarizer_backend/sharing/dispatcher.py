"""E-mail a meeting summary to a list of recipients and log each send."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..capabilities import Capability, Unconfigured
from ..errors import NotFoundError, ServiceUnavailableError, StoreFailure, ValidationError
from ..storage import MeetingNotFoundError, MeetingStore, StoreError
from .mailer import MailDeliveryError, MailSender, build_share_message

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecipientOutcome:
    """Result of sending to, and recording, one recipient."""

    email: str
    sent: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "email": self.email,
            "status": "sent" if self.sent else "failed",
        }
        if self.error:
            payload["error"] = self.error
        return payload


@dataclass(slots=True)
class ShareReport:
    meeting_id: int
    outcomes: list[RecipientOutcome] = field(default_factory=list)

    @property
    def sent_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.sent)

    @property
    def all_sent(self) -> bool:
        return self.sent_count == len(self.outcomes)

    @property
    def any_sent(self) -> bool:
        return self.sent_count > 0


def parse_recipients(recipient_emails: str) -> list[str]:
    """Split on commas and trim; address syntax is left to the mail server."""
    return [email.strip() for email in recipient_emails.split(",") if email.strip()]


def _coerce_meeting_id(meeting_id: Any) -> int:
    if isinstance(meeting_id, bool):
        raise ValidationError("Meeting ID must be an integer")
    try:
        return int(meeting_id)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Meeting ID must be an integer") from exc


def _send_to_recipient(
    *,
    store: MeetingStore,
    mailer: MailSender,
    meeting_id: int,
    recipient: str,
    prompt: str,
    summary: str,
) -> RecipientOutcome:
    try:
        message = build_share_message(
            sender=mailer.sender,
            recipient=recipient,
            prompt=prompt,
            summary=summary,
        )
        mailer.send(message)
    except (MailDeliveryError, ValueError) as exc:
        logger.warning("Sharing meeting %d with %s failed: %s", meeting_id, recipient, exc)
        return RecipientOutcome(email=recipient, sent=False, error=str(exc))

    try:
        store.record_share(meeting_id, recipient)
    except StoreError as exc:
        # The mail went out; only the log entry is missing.
        logger.error(
            "Sent meeting %d to %s but failed to record the share: %s",
            meeting_id,
            recipient,
            exc,
        )
    return RecipientOutcome(email=recipient, sent=True)


def share_summary(
    *,
    store: MeetingStore,
    mailer: Capability[MailSender],
    meeting_id: Any,
    recipient_emails: str | None,
    summary: str | None,
) -> ShareReport:
    """Send ``summary`` to each recipient in turn.

    Recipients are independent: a delivery failure for one address is recorded
    in its outcome and the remaining addresses are still attempted.
    """
    if (
        meeting_id in (None, "", 0)
        or not recipient_emails
        or not recipient_emails.strip()
        or not summary
        or not summary.strip()
    ):
        raise ValidationError("Meeting ID, recipient emails, and summary are required")

    resolved_id = _coerce_meeting_id(meeting_id)
    recipients = parse_recipients(recipient_emails)
    if not recipients:
        raise ValidationError("At least one recipient email is required")

    try:
        meeting = store.get_meeting(resolved_id)
    except MeetingNotFoundError as exc:
        raise NotFoundError("Meeting not found") from exc
    except StoreError as exc:
        raise StoreFailure("Database error") from exc

    if isinstance(mailer, Unconfigured):
        raise ServiceUnavailableError(mailer.reason)

    report = ShareReport(meeting_id=resolved_id)
    for recipient in recipients:
        report.outcomes.append(
            _send_to_recipient(
                store=store,
                mailer=mailer.client,
                meeting_id=resolved_id,
                recipient=recipient,
                prompt=meeting.prompt,
                summary=summary,
            )
        )

    logger.info(
        "Shared meeting %d with %d of %d recipients",
        resolved_id,
        report.sent_count,
        len(report.outcomes),
    )
    return report


__all__ = ["RecipientOutcome", "ShareReport", "parse_recipients", "share_summary"]
