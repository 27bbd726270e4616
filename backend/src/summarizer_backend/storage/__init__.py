"""Relational persistence for meetings and share records."""

from .database import MeetingNotFoundError, MeetingStore, StoreError
from .models import Meeting, MeetingListing, ShareRecord

__all__ = [
    "Meeting",
    "MeetingListing",
    "MeetingNotFoundError",
    "MeetingStore",
    "ShareRecord",
    "StoreError",
]
