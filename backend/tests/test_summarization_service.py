from __future__ import annotations

import httpx
import pytest

from summarizer_backend.capabilities import Configured, Unconfigured
from summarizer_backend.errors import (
    ServiceUnavailableError,
    StoreFailure,
    UpstreamError,
    ValidationError,
)
from summarizer_backend.storage import MeetingStore, StoreError
from summarizer_backend.summarization import (
    FALLBACK_SUMMARY,
    SYSTEM_PROMPT,
    ChatCompletionClient,
    ChatCompletionConfig,
    SummarizationError,
    build_summary_messages,
    summarize_and_store,
)
from summarizer_backend.summarization import completion as completion_module


def test_build_summary_messages_interpolates_verbatim() -> None:
    messages = build_summary_messages("  Alice: ship it  ", "Only action items")

    assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert messages[1]["role"] == "user"
    assert messages[1]["content"] == (
        "Transcript:   Alice: ship it  \n\n"
        "Instructions: Only action items\n\n"
        "Please provide a structured summary based on these instructions."
    )
    assert SYSTEM_PROMPT.startswith("You are an expert meeting summarizer.")


def test_client_returns_first_choice(fake_completion) -> None:
    client = ChatCompletionClient(
        ChatCompletionConfig(api_key="test-key"), request_fn=fake_completion
    )

    assert client.summarize("transcript", "prompt") == "- Decision: ship in March"
    assert len(fake_completion.calls) == 1


def test_client_falls_back_when_no_choice(fake_completion) -> None:
    fake_completion.content = None
    client = ChatCompletionClient(
        ChatCompletionConfig(api_key="test-key"), request_fn=fake_completion
    )

    assert client.summarize("transcript", "prompt") == FALLBACK_SUMMARY


def test_client_wraps_http_errors(fake_completion) -> None:
    request = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")
    response = httpx.Response(429, request=request)
    fake_completion.error = httpx.HTTPStatusError(
        "rate limited", request=request, response=response
    )
    client = ChatCompletionClient(
        ChatCompletionConfig(api_key="test-key"), request_fn=fake_completion
    )

    with pytest.raises(SummarizationError) as excinfo:
        client.summarize("transcript", "prompt")

    assert excinfo.value.status_code == 429
    assert len(fake_completion.calls) == 1


def test_default_request_posts_pinned_parameters(monkeypatch) -> None:
    captured: dict[str, object] = {}

    def fake_post(url, *, headers, json, timeout):
        captured.update(url=url, headers=headers, json=json, timeout=timeout)
        request = httpx.Request("POST", url)
        return httpx.Response(
            200,
            request=request,
            json={"choices": [{"message": {"content": "Summary text"}}]},
        )

    monkeypatch.setattr(completion_module.httpx, "post", fake_post)
    client = ChatCompletionClient(ChatCompletionConfig(api_key="gsk-test"))

    assert client.summarize("the transcript", "the prompt") == "Summary text"
    assert captured["url"] == "https://api.groq.com/openai/v1/chat/completions"
    assert captured["headers"]["Authorization"] == "Bearer gsk-test"
    body = captured["json"]
    assert body["model"] == "llama3-8b-8192"
    assert body["temperature"] == pytest.approx(0.3)
    assert body["max_tokens"] == 2048
    assert [message["role"] for message in body["messages"]] == ["system", "user"]


def test_summarize_and_store_persists_meeting(store: MeetingStore, completion_provider) -> None:
    generated = summarize_and_store(
        store=store,
        provider=completion_provider,
        transcript="Sarah: launch in March",
        prompt="Bullet points",
    )

    meeting = store.get_meeting(generated.meeting_id)
    assert meeting.transcript == "Sarah: launch in March"
    assert meeting.prompt == "Bullet points"
    assert meeting.summary == generated.summary == "- Decision: ship in March"


@pytest.mark.parametrize(
    ("transcript", "prompt"),
    [("", "Bullet points"), ("Transcript", ""), ("   ", "Bullet points"), (None, "x")],
)
def test_summarize_and_store_validates_fields(
    store: MeetingStore, completion_provider, fake_completion, transcript, prompt
) -> None:
    with pytest.raises(ValidationError):
        summarize_and_store(
            store=store, provider=completion_provider, transcript=transcript, prompt=prompt
        )

    assert store.list_meetings() == []
    assert fake_completion.calls == []


def test_summarize_and_store_unconfigured_is_demo(store: MeetingStore) -> None:
    with pytest.raises(ServiceUnavailableError) as excinfo:
        summarize_and_store(
            store=store,
            provider=Unconfigured("AI service not available."),
            transcript="t",
            prompt="p",
        )

    assert excinfo.value.to_payload() == {
        "error": "AI service not available.",
        "demo": True,
    }
    assert store.list_meetings() == []


def test_summarize_and_store_provider_failure_leaves_no_row(
    store: MeetingStore, fake_completion
) -> None:
    fake_completion.error = httpx.ConnectError("boom")
    provider = Configured(
        ChatCompletionClient(ChatCompletionConfig(api_key="k"), request_fn=fake_completion)
    )

    with pytest.raises(UpstreamError):
        summarize_and_store(store=store, provider=provider, transcript="t", prompt="p")

    assert store.list_meetings() == []


def test_summarize_and_store_save_failure_after_completion(
    store: MeetingStore, completion_provider, fake_completion, monkeypatch
) -> None:
    def _fail(*args, **kwargs):
        raise StoreError("disk I/O error")

    monkeypatch.setattr(store, "create_meeting", _fail)

    with pytest.raises(StoreFailure) as excinfo:
        summarize_and_store(
            store=store, provider=completion_provider, transcript="t", prompt="p"
        )

    assert excinfo.value.status_code == 500
    assert excinfo.value.to_payload() == {"error": "Failed to save meeting"}
    assert len(fake_completion.calls) == 1
