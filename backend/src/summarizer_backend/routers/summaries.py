# Summary generation endpoint.

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from ..capabilities import Capability
from ..dependencies import get_completion_provider, get_store
from ..storage import MeetingStore
from ..summarization import ChatCompletionClient, summarize_and_store

router = APIRouter(prefix="/api", tags=["summaries"])


class GenerateSummaryRequest(BaseModel):
    transcript: str | None = None
    prompt: str | None = Field(None, description="Free-form summary instructions.")


class GenerateSummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    meeting_id: int = Field(..., alias="meetingId")
    message: str


@router.post(
    "/generate-summary",
    status_code=status.HTTP_200_OK,
    response_model=GenerateSummaryResponse,
    summary="Generate and store an AI summary for a transcript",
)
def generate_summary(
    payload: GenerateSummaryRequest,
    store: MeetingStore = Depends(get_store),
    provider: Capability[ChatCompletionClient] = Depends(get_completion_provider),
) -> GenerateSummaryResponse:
    generated = summarize_and_store(
        store=store,
        provider=provider,
        transcript=payload.transcript,
        prompt=payload.prompt,
    )
    return GenerateSummaryResponse(
        summary=generated.summary,
        meeting_id=generated.meeting_id,
        message="Summary generated successfully",
    )


__all__ = ["router"]
