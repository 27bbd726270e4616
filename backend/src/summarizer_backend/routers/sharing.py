# Summary sharing endpoint.

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..capabilities import Capability
from ..dependencies import get_mail_provider, get_store
from ..sharing import MailSender, share_summary
from ..storage import MeetingStore

router = APIRouter(prefix="/api", tags=["sharing"])


class ShareSummaryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    meeting_id: int | str | None = Field(None, validation_alias="meetingId")
    recipient_emails: str | None = Field(None, validation_alias="recipientEmails")
    summary: str | None = None


class RecipientResult(BaseModel):
    email: str
    status: str
    error: str | None = None


class ShareSummaryResponse(BaseModel):
    message: str
    results: list[RecipientResult]


@router.post(
    "/share-summary",
    response_model=ShareSummaryResponse,
    response_model_exclude_none=True,
    summary="E-mail a summary to comma-separated recipients",
)
def share_meeting_summary(
    payload: ShareSummaryRequest,
    store: MeetingStore = Depends(get_store),
    mailer: Capability[MailSender] = Depends(get_mail_provider),
) -> Any:
    report = share_summary(
        store=store,
        mailer=mailer,
        meeting_id=payload.meeting_id,
        recipient_emails=payload.recipient_emails,
        summary=payload.summary,
    )
    results = [outcome.to_dict() for outcome in report.outcomes]

    if not report.any_sent:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to share summary", "results": results},
        )

    if report.all_sent:
        message = "Summary shared successfully"
    else:
        message = (
            f"Summary shared with {report.sent_count} of {len(report.outcomes)} recipients"
        )
    return ShareSummaryResponse(message=message, results=results)


__all__ = ["router"]
