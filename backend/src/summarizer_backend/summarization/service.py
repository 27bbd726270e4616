"""Generate a summary for a transcript and persist it as a new meeting."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..capabilities import Capability, Unconfigured
from ..errors import ServiceUnavailableError, StoreFailure, UpstreamError, ValidationError
from ..storage import MeetingStore, StoreError
from .completion import ChatCompletionClient, SummarizationError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GeneratedSummary:
    meeting_id: int
    summary: str


def summarize_and_store(
    *,
    store: MeetingStore,
    provider: Capability[ChatCompletionClient],
    transcript: str | None,
    prompt: str | None,
) -> GeneratedSummary:
    """Run the completion call and save transcript, prompt and summary.

    Nothing is written when validation fails, the provider is unconfigured or
    the provider call raises. A store failure after a successful call is
    reported as an error; the completion is not refunded.
    """
    if not transcript or not transcript.strip() or not prompt or not prompt.strip():
        raise ValidationError("Transcript and prompt are required")

    if isinstance(provider, Unconfigured):
        raise ServiceUnavailableError(provider.reason)

    try:
        summary = provider.client.summarize(transcript, prompt)
    except SummarizationError as exc:
        logger.error("Summary generation failed: %s", exc)
        raise UpstreamError("Failed to generate summary") from exc

    try:
        meeting_id = store.create_meeting(transcript, prompt, summary)
    except StoreError as exc:
        logger.error("Failed to save generated summary: %s", exc)
        raise StoreFailure("Failed to save meeting") from exc

    logger.info("Stored meeting %d (%d transcript chars)", meeting_id, len(transcript))
    return GeneratedSummary(meeting_id=meeting_id, summary=summary)


__all__ = ["GeneratedSummary", "summarize_and_store"]
