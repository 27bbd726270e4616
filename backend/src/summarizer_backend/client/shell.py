"""Interaction state for a single summarizer session.

:class:`ClientShell` holds what a form-driven front end shows: the transcript
and instruction text, the current summary, the meeting identifier, a pending
upload and one status message. Each action issues at most one request through
:class:`~summarizer_backend.client.api.SummarizerApiClient` and overwrites the
status message with its outcome.

States move as follows::

    idle --generate--> loading --ok--> summary-ready --edit--> editing
                          |                  ^                   |
                          +--error--> idle   +----save/cancel----+

``clear`` returns to ``idle`` from anywhere.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..ingestion import is_text_upload
from ..settings import DEFAULT_MAX_UPLOAD_BYTES
from .api import ApiRequestError, SummarizerApiClient

logger = logging.getLogger(__name__)


class ShellState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUMMARY_READY = "summary-ready"
    EDITING = "editing"


class MessageKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(slots=True)
class StatusMessage:
    kind: MessageKind
    text: str


@dataclass(slots=True)
class PendingUpload:
    filename: str
    data: bytes
    content_type: str


@dataclass
class ClientShell:
    api: SummarizerApiClient
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    state: ShellState = ShellState.IDLE
    transcript: str = ""
    prompt: str = ""
    summary: str = ""
    meeting_id: int | None = None
    recipient_emails: str = ""
    pending_upload: PendingUpload | None = None
    status: StatusMessage | None = None
    share_results: list[dict[str, Any]] = field(default_factory=list)
    _saved_summary: str = field(default="", repr=False, init=False)

    @property
    def is_loading(self) -> bool:
        return self.state is ShellState.LOADING

    @property
    def is_editing(self) -> bool:
        return self.state is ShellState.EDITING

    def _notify(self, kind: MessageKind, text: str) -> None:
        self.status = StatusMessage(kind, text)

    def _refuse_while_editing(self) -> bool:
        # Leaving edit mode goes through save_edit or cancel_edit only.
        if not self.is_editing:
            return False
        self._notify(MessageKind.ERROR, "Save or cancel the summary edit first")
        return True

    def _settled_state(self) -> ShellState:
        return ShellState.SUMMARY_READY if self.summary else ShellState.IDLE

    @staticmethod
    def _error_text(exc: ApiRequestError, fallback: str) -> str:
        return exc.message or fallback

    def select_file(
        self, filename: str, data: bytes, content_type: str | None = None
    ) -> bool:
        """Hold a file for upload after the same type and size checks the server runs."""
        if content_type is None:
            content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        if not is_text_upload(filename, content_type):
            self._notify(MessageKind.ERROR, "Only text files (.txt) are allowed")
            return False
        if len(data) > self.max_upload_bytes:
            self._notify(
                MessageKind.ERROR,
                f"File size must be less than {self.max_upload_bytes // (1024 * 1024)}MB",
            )
            return False

        self.pending_upload = PendingUpload(filename, data, content_type)
        self._notify(
            MessageKind.INFO,
            f'File "{filename}" selected. Click "Upload & Extract Text" to continue.',
        )
        return True

    def upload_selected(self) -> bool:
        if self.is_loading or self._refuse_while_editing():
            return False
        if self.pending_upload is None:
            self._notify(MessageKind.ERROR, "Please select a file first")
            return False

        pending = self.pending_upload
        self.state = ShellState.LOADING
        self.status = None
        try:
            response = self.api.upload_transcript(
                pending.filename, pending.data, pending.content_type
            )
        except ApiRequestError as exc:
            logger.error("Error uploading file: %s", exc)
            self._notify(MessageKind.ERROR, self._error_text(exc, "Failed to upload file"))
            return False
        finally:
            self.state = self._settled_state()

        self.transcript = response["transcript"]
        self.pending_upload = None
        self._notify(
            MessageKind.SUCCESS,
            f'Text extracted from "{pending.filename}" successfully!',
        )
        return True

    def generate(self) -> bool:
        if self.is_loading or self._refuse_while_editing():
            return False
        if not self.transcript.strip() or not self.prompt.strip():
            self._notify(MessageKind.ERROR, "Please provide both transcript and prompt")
            return False

        self.state = ShellState.LOADING
        self.status = None
        try:
            response = self.api.generate_summary(
                self.transcript.strip(), self.prompt.strip()
            )
        except ApiRequestError as exc:
            logger.error("Error generating summary: %s", exc)
            self.state = self._settled_state()
            self._notify(
                MessageKind.ERROR, self._error_text(exc, "Failed to generate summary")
            )
            return False

        self.summary = response["summary"]
        self._saved_summary = self.summary
        self.meeting_id = response["meetingId"]
        self.state = ShellState.SUMMARY_READY
        self._notify(MessageKind.SUCCESS, "Summary generated successfully!")
        return True

    def start_edit(self) -> bool:
        if self.state is not ShellState.SUMMARY_READY:
            return False
        self.state = ShellState.EDITING
        return True

    def edit_summary(self, text: str) -> None:
        if not self.is_editing:
            raise RuntimeError("Summary can only be changed while editing.")
        self.summary = text

    def save_edit(self) -> bool:
        if not self.meeting_id or not self.summary.strip():
            self._notify(MessageKind.ERROR, "Cannot update summary")
            return False

        text = self.summary.strip()
        try:
            self.api.update_summary(self.meeting_id, text)
        except ApiRequestError as exc:
            logger.error("Error updating summary: %s", exc)
            self._notify(
                MessageKind.ERROR, self._error_text(exc, "Failed to update summary")
            )
            return False

        self.summary = text
        self._saved_summary = text
        self.state = ShellState.SUMMARY_READY
        self._notify(MessageKind.SUCCESS, "Summary updated successfully!")
        return True

    def cancel_edit(self) -> None:
        """Leave edit mode and discard unsaved text."""
        if not self.is_editing:
            return
        self.summary = self._saved_summary
        self.state = ShellState.SUMMARY_READY

    def share(self) -> bool:
        if (
            not self.meeting_id
            or not self.summary.strip()
            or not self.recipient_emails.strip()
        ):
            self._notify(MessageKind.ERROR, "Please provide recipient emails")
            return False

        try:
            response = self.api.share_summary(
                self.meeting_id, self.recipient_emails.strip(), self.summary.strip()
            )
        except ApiRequestError as exc:
            logger.error("Error sharing summary: %s", exc)
            self._notify(MessageKind.ERROR, self._error_text(exc, "Failed to share summary"))
            return False

        self.share_results = list(response.get("results") or [])
        self.recipient_emails = ""
        self._notify(
            MessageKind.SUCCESS, response.get("message") or "Summary shared successfully!"
        )
        return True

    def clear(self) -> None:
        self.state = ShellState.IDLE
        self.transcript = ""
        self.prompt = ""
        self.summary = ""
        self._saved_summary = ""
        self.meeting_id = None
        self.recipient_emails = ""
        self.pending_upload = None
        self.status = None
        self.share_results = []


__all__ = [
    "ClientShell",
    "MessageKind",
    "PendingUpload",
    "ShellState",
    "StatusMessage",
]
