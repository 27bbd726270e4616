"""SQLAlchemy table declarations for the meeting store."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

Base = declarative_base()


class Meeting(Base):
    __tablename__ = "meetings"
    # AUTOINCREMENT keeps ids of deleted rows from being handed out again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    transcript: Mapped[str | None] = mapped_column(Text, default=None)
    prompt: Mapped[str | None] = mapped_column(Text, default=None)
    summary: Mapped[str | None] = mapped_column(Text, default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )


class SharedSummary(Base):
    __tablename__ = "shared_summaries"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    meeting_id: Mapped[int] = mapped_column(ForeignKey("meetings.id"), index=True)
    recipient_email: Mapped[str] = mapped_column(String(320))
    shared_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )


__all__ = ["Base", "Meeting", "SharedSummary"]
