# Transcript file upload endpoint.

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, UploadFile, status
from pydantic import BaseModel

from ..dependencies import get_app_settings
from ..errors import ValidationError
from ..ingestion import TranscriptUploadError, decode_transcript, validate_transcript_upload
from ..settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transcripts"])


class UploadTranscriptResponse(BaseModel):
    transcript: str
    filename: str
    message: str


@router.post(
    "/upload-transcript",
    status_code=status.HTTP_200_OK,
    response_model=UploadTranscriptResponse,
    summary="Extract text from an uploaded transcript file",
)
async def upload_transcript(
    transcript: UploadFile | None = File(None),
    settings: Settings = Depends(get_app_settings),
) -> UploadTranscriptResponse:
    """Return the UTF-8 content of a ``.txt`` / ``text/*`` upload; nothing is stored."""
    if transcript is None:
        raise ValidationError("No file uploaded")

    try:
        validate_transcript_upload(
            transcript.filename,
            transcript.content_type,
            transcript.size,
            max_bytes=settings.max_upload_bytes,
        )
        # Read one byte past the limit so an undeclared oversize body is caught.
        data = await transcript.read(settings.max_upload_bytes + 1)
        uploaded = decode_transcript(
            transcript.filename or "",
            data,
            max_bytes=settings.max_upload_bytes,
        )
    except TranscriptUploadError as exc:
        logger.info("Rejected transcript upload %r: %s", transcript.filename, exc)
        raise ValidationError(str(exc)) from exc
    finally:
        await transcript.close()

    return UploadTranscriptResponse(
        transcript=uploaded.transcript,
        filename=uploaded.filename,
        message="Transcript uploaded successfully",
    )


__all__ = ["router"]
