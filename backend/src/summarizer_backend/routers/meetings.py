"""Endpoints for reading, listing and editing stored meetings."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..dependencies import get_store
from ..errors import NotFoundError, StoreFailure, ValidationError
from ..storage import Meeting, MeetingListing, MeetingNotFoundError, MeetingStore, StoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["meetings"])


class MeetingResponse(BaseModel):
    id: int
    transcript: str
    prompt: str
    summary: str | None = None
    created_at: str

    @classmethod
    def from_meeting(cls, meeting: Meeting) -> "MeetingResponse":
        return cls(**meeting.to_dict())


class MeetingListItem(BaseModel):
    id: int
    prompt: str
    created_at: str

    @classmethod
    def from_listing(cls, listing: MeetingListing) -> "MeetingListItem":
        return cls(**listing.to_dict())


class UpdateSummaryRequest(BaseModel):
    summary: str | None = Field(None, description="Replacement summary text.")


class MessageResponse(BaseModel):
    message: str


@router.get("/meeting/{meeting_id}", response_model=MeetingResponse)
def get_meeting(
    meeting_id: int, store: MeetingStore = Depends(get_store)
) -> MeetingResponse:
    """Return the full meeting row, transcript included."""
    try:
        meeting = store.get_meeting(meeting_id)
    except MeetingNotFoundError as exc:
        raise NotFoundError("Meeting not found") from exc
    except StoreError as exc:
        logger.error("Failed to load meeting %d: %s", meeting_id, exc)
        raise StoreFailure("Database error") from exc
    return MeetingResponse.from_meeting(meeting)


@router.put("/meeting/{meeting_id}/summary", response_model=MessageResponse)
def update_meeting_summary(
    meeting_id: int,
    payload: UpdateSummaryRequest,
    store: MeetingStore = Depends(get_store),
) -> MessageResponse:
    if not payload.summary or not payload.summary.strip():
        raise ValidationError("Summary is required")

    try:
        store.update_summary(meeting_id, payload.summary)
    except MeetingNotFoundError as exc:
        raise NotFoundError("Meeting not found") from exc
    except StoreError as exc:
        logger.error("Failed to update summary of meeting %d: %s", meeting_id, exc)
        raise StoreFailure("Failed to update summary") from exc
    return MessageResponse(message="Summary updated successfully")


@router.get("/meetings", response_model=list[MeetingListItem])
def list_meetings(store: MeetingStore = Depends(get_store)) -> list[MeetingListItem]:
    """Return all meetings, newest first; transcripts and summaries are omitted."""
    try:
        listings = store.list_meetings()
    except StoreError as exc:
        logger.error("Failed to list meetings: %s", exc)
        raise StoreFailure("Database error") from exc
    return [MeetingListItem.from_listing(item) for item in listings]


__all__ = ["router"]
