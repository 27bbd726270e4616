"""Dataclasses returned by the meeting store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _timestamp_text(value: Any) -> str:
    # SQLite CURRENT_TIMESTAMP layout: "YYYY-MM-DD HH:MM:SS" in UTC.
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    return "" if value is None else str(value)


@dataclass(slots=True)
class Meeting:
    """A transcript, the user's instructions and the (possibly edited) summary."""

    id: int
    transcript: str
    prompt: str
    summary: str | None
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "transcript": self.transcript,
            "prompt": self.prompt,
            "summary": self.summary,
            "created_at": self.created_at,
        }

    @classmethod
    def from_record(cls, record: Any) -> "Meeting":
        return cls(
            id=int(record.id),
            transcript=record.transcript or "",
            prompt=record.prompt or "",
            summary=record.summary,
            created_at=_timestamp_text(record.created_at),
        )


@dataclass(slots=True)
class MeetingListing:
    """List projection of a meeting; transcript and summary are left out."""

    id: int
    prompt: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "prompt": self.prompt, "created_at": self.created_at}

    @classmethod
    def from_record(cls, record: Any) -> "MeetingListing":
        return cls(
            id=int(record.id),
            prompt=record.prompt or "",
            created_at=_timestamp_text(record.created_at),
        )


@dataclass(slots=True)
class ShareRecord:
    """Log entry for one summary e-mailed to one recipient."""

    id: int
    meeting_id: int
    recipient_email: str
    shared_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "meeting_id": self.meeting_id,
            "recipient_email": self.recipient_email,
            "shared_at": self.shared_at,
        }

    @classmethod
    def from_record(cls, record: Any) -> "ShareRecord":
        return cls(
            id=int(record.id),
            meeting_id=int(record.meeting_id),
            recipient_email=str(record.recipient_email),
            shared_at=_timestamp_text(record.shared_at),
        )


__all__ = ["Meeting", "MeetingListing", "ShareRecord"]
