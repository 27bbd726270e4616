from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from summarizer_backend.app import create_app
from summarizer_backend.capabilities import Configured, Unconfigured
from summarizer_backend.client import (
    ApiRequestError,
    ClientShell,
    MessageKind,
    ShellState,
    SummarizerApiClient,
)


@pytest.fixture
def shell(settings, completion_provider, mailer_factory) -> Iterator[ClientShell]:
    app = create_app(
        settings,
        completion_provider=completion_provider,
        mail_provider=Configured(mailer_factory()),
    )
    with TestClient(app) as test_client:
        yield ClientShell(api=SummarizerApiClient(http_client=test_client))


def test_generate_requires_both_fields(shell: ClientShell, fake_completion) -> None:
    shell.transcript = "Some transcript"

    assert shell.generate() is False
    assert shell.state is ShellState.IDLE
    assert shell.status.kind is MessageKind.ERROR
    assert shell.status.text == "Please provide both transcript and prompt"
    assert fake_completion.calls == []


def test_full_session_flow(shell: ClientShell) -> None:
    assert shell.select_file("standup.txt", b"John: Q1 grew 15%.", "text/plain")
    assert shell.status.kind is MessageKind.INFO
    assert shell.upload_selected()
    assert shell.transcript == "John: Q1 grew 15%."
    assert shell.pending_upload is None

    shell.prompt = "Bullet points"
    assert shell.generate()
    assert shell.state is ShellState.SUMMARY_READY
    assert shell.summary == "- Decision: ship in March"
    assert shell.meeting_id is not None

    assert shell.start_edit()
    shell.edit_summary("  - Decision: ship in April  ")
    assert shell.save_edit()
    assert shell.state is ShellState.SUMMARY_READY
    assert shell.summary == "- Decision: ship in April"
    assert shell.api.get_meeting(shell.meeting_id)["summary"] == "- Decision: ship in April"

    shell.recipient_emails = "a@x.com, b@x.com"
    assert shell.share()
    assert shell.recipient_emails == ""
    assert [result["email"] for result in shell.share_results] == ["a@x.com", "b@x.com"]
    assert shell.status.text == "Summary shared successfully"


def test_cancel_edit_restores_saved_summary(shell: ClientShell) -> None:
    shell.transcript = "t"
    shell.prompt = "p"
    shell.generate()

    shell.start_edit()
    shell.edit_summary("unsaved draft")
    shell.cancel_edit()

    assert shell.state is ShellState.SUMMARY_READY
    assert shell.summary == "- Decision: ship in March"


def test_upload_and_generate_refused_while_editing(shell: ClientShell, fake_completion) -> None:
    shell.transcript = "t"
    shell.prompt = "p"
    shell.generate()
    shell.start_edit()
    shell.edit_summary("unsaved draft")
    shell.select_file("next.txt", b"Another meeting", "text/plain")

    assert shell.upload_selected() is False
    assert shell.generate() is False
    assert shell.state is ShellState.EDITING
    assert shell.summary == "unsaved draft"
    assert shell.transcript == "t"
    assert shell.status.text == "Save or cancel the summary edit first"
    assert len(fake_completion.calls) == 1

    shell.cancel_edit()
    assert shell.summary == "- Decision: ship in March"
    assert shell.upload_selected()
    assert shell.transcript == "Another meeting"
    assert shell.state is ShellState.SUMMARY_READY


def test_select_file_rejects_client_side(shell: ClientShell) -> None:
    assert shell.select_file("deck.pdf", b"%PDF", "application/pdf") is False
    assert shell.status.text == "Only text files (.txt) are allowed"

    shell.max_upload_bytes = 4
    assert shell.select_file("notes.txt", b"12345", "text/plain") is False
    assert shell.pending_upload is None


def test_upload_without_selection(shell: ClientShell) -> None:
    assert shell.upload_selected() is False
    assert shell.status.text == "Please select a file first"


def test_clear_resets_everything(shell: ClientShell) -> None:
    shell.transcript = "t"
    shell.prompt = "p"
    shell.generate()
    shell.recipient_emails = "a@x.com"
    shell.select_file("notes.txt", b"x", "text/plain")

    shell.clear()

    assert shell.state is ShellState.IDLE
    assert (shell.transcript, shell.prompt, shell.summary) == ("", "", "")
    assert shell.meeting_id is None
    assert shell.recipient_emails == ""
    assert shell.pending_upload is None
    assert shell.status is None


def test_generate_surfaces_server_error_verbatim(settings) -> None:
    app = create_app(
        settings,
        completion_provider=Unconfigured("AI service not available."),
        mail_provider=Unconfigured("off"),
    )
    with TestClient(app) as test_client:
        shell = ClientShell(api=SummarizerApiClient(http_client=test_client))
        shell.transcript = "t"
        shell.prompt = "p"

        assert shell.generate() is False

    assert shell.state is ShellState.IDLE
    assert shell.status.kind is MessageKind.ERROR
    assert shell.status.text == "AI service not available."


def test_api_client_uses_fallback_on_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    api = SummarizerApiClient(transport=httpx.MockTransport(handler))
    shell = ClientShell(api=api)
    shell.transcript = "t"
    shell.prompt = "p"

    assert shell.generate() is False
    assert shell.status.text == "Failed to generate summary"

    with pytest.raises(ApiRequestError) as excinfo:
        api.health()
    assert excinfo.value.status_code is None
    api.close()


def test_api_client_reports_demo_flag() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "Email service not configured.", "demo": True})

    with SummarizerApiClient(transport=httpx.MockTransport(handler)) as api:
        with pytest.raises(ApiRequestError) as excinfo:
            api.share_summary(1, "a@x.com", "s")

    assert excinfo.value.demo is True
    assert excinfo.value.status_code == 503
    assert excinfo.value.message == "Email service not configured."
