"""SQLAlchemy-backed persistence for meetings and share records."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from sqlalchemy import Engine, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from . import orm
from .models import Meeting, MeetingListing, ShareRecord

logger = logging.getLogger(__name__)

_MEMORY_PATH = ":memory:"


class StoreError(RuntimeError):
    """Raised when a statement against the store fails."""


class MeetingNotFoundError(LookupError):
    """Raised when no meeting row matches the requested identifier."""

    def __init__(self, meeting_id: int) -> None:
        super().__init__(f"Meeting {meeting_id} not found")
        self.meeting_id = meeting_id


def _build_engine(database_path: Path | str) -> Engine:
    if str(database_path) == _MEMORY_PATH:
        # One shared connection, otherwise every checkout sees an empty database.
        return create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    path = Path(database_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )


class MeetingStore:
    """Explicit handle on the meetings database.

    The hosting process calls :meth:`open` at startup and :meth:`close` at
    shutdown. Each public method runs in its own session and commits before
    returning; nothing spans several calls in a transaction.
    """

    def __init__(self, database_path: Path | str) -> None:
        self.database_path = database_path
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> "MeetingStore":
        """Connect and create the tables if they do not exist yet."""
        if self._engine is not None:
            return self

        try:
            engine = _build_engine(self.database_path)
            orm.Base.metadata.create_all(engine)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"Failed to open database at {self.database_path}") from exc

        self._engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)
        logger.info("Opened meeting store at %s", self.database_path)
        return self

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._sessions = None
        logger.info("Closed meeting store at %s", self.database_path)

    def __enter__(self) -> "MeetingStore":
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        sessions = self._sessions
        if sessions is None:
            raise StoreError("Meeting store is not open.")
        session = sessions()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StoreError(f"Database statement failed: {exc}") from exc
        finally:
            session.close()

    def create_meeting(self, transcript: str, prompt: str, summary: str | None) -> int:
        """Insert a meeting row and return its identifier."""
        with self._session() as session:
            record = orm.Meeting(transcript=transcript, prompt=prompt, summary=summary)
            session.add(record)
            session.flush()
            meeting_id = record.id
        if meeting_id is None:
            raise StoreError("Insert did not return a meeting identifier.")
        return int(meeting_id)

    def get_meeting(self, meeting_id: int) -> Meeting:
        with self._session() as session:
            record = session.get(orm.Meeting, meeting_id)
            if record is None:
                raise MeetingNotFoundError(meeting_id)
            return Meeting.from_record(record)

    def list_meetings(self) -> list[MeetingListing]:
        """Return every meeting, newest first, without transcript or summary."""
        statement = select(
            orm.Meeting.id, orm.Meeting.prompt, orm.Meeting.created_at
        ).order_by(orm.Meeting.created_at.desc(), orm.Meeting.id.desc())
        with self._session() as session:
            rows = session.execute(statement).all()
        return [MeetingListing.from_record(row) for row in rows]

    def update_summary(self, meeting_id: int, summary: str) -> None:
        with self._session() as session:
            record = session.get(orm.Meeting, meeting_id)
            if record is None:
                raise MeetingNotFoundError(meeting_id)
            record.summary = summary

    def record_share(self, meeting_id: int, recipient_email: str) -> None:
        with self._session() as session:
            session.add(
                orm.SharedSummary(meeting_id=meeting_id, recipient_email=recipient_email)
            )

    def list_shares(self, meeting_id: int) -> list[ShareRecord]:
        statement = (
            select(orm.SharedSummary)
            .where(orm.SharedSummary.meeting_id == meeting_id)
            .order_by(orm.SharedSummary.id)
        )
        with self._session() as session:
            records = session.scalars(statement).all()
            return [ShareRecord.from_record(record) for record in records]


__all__ = ["MeetingNotFoundError", "MeetingStore", "StoreError"]
