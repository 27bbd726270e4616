"""Validation and decoding of uploaded transcript files."""

from __future__ import annotations

from dataclasses import dataclass

from .settings import DEFAULT_MAX_UPLOAD_BYTES

_TEXT_MEDIA_PREFIX = "text/"
_TEXT_SUFFIX = ".txt"


class TranscriptUploadError(ValueError):
    """Raised when an uploaded file cannot be accepted as a transcript."""


@dataclass(slots=True)
class UploadedTranscript:
    transcript: str
    filename: str


def is_text_upload(filename: str | None, content_type: str | None) -> bool:
    """A file is accepted when its media type is textual or its name ends in .txt."""
    if content_type and content_type.lower().startswith(_TEXT_MEDIA_PREFIX):
        return True
    return bool(filename) and filename.lower().endswith(_TEXT_SUFFIX)


def validate_transcript_upload(
    filename: str | None,
    content_type: str | None,
    size: int | None,
    *,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> None:
    """Reject an upload on its declared metadata, before any content is read."""
    if not filename:
        raise TranscriptUploadError("No file uploaded")
    if not is_text_upload(filename, content_type):
        raise TranscriptUploadError("Only text files are allowed")
    if size is not None and size > max_bytes:
        raise TranscriptUploadError(
            f"File size must be less than {max_bytes // (1024 * 1024)}MB"
        )


def decode_transcript(
    filename: str,
    data: bytes,
    *,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> UploadedTranscript:
    """Decode the uploaded bytes as UTF-8 text."""
    if len(data) > max_bytes:
        raise TranscriptUploadError(
            f"File size must be less than {max_bytes // (1024 * 1024)}MB"
        )
    return UploadedTranscript(
        transcript=data.decode("utf-8", errors="replace"),
        filename=filename,
    )


__all__ = [
    "TranscriptUploadError",
    "UploadedTranscript",
    "decode_transcript",
    "is_text_upload",
    "validate_transcript_upload",
]
