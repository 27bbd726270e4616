from __future__ import annotations

from collections.abc import Iterator
from email.message import EmailMessage
from pathlib import Path
from typing import Any, Mapping, Sequence

import pytest

from summarizer_backend.capabilities import Configured
from summarizer_backend.settings import Settings, set_settings
from summarizer_backend.sharing import MailDeliveryError
from summarizer_backend.storage import MeetingStore
from summarizer_backend.summarization import ChatCompletionClient, ChatCompletionConfig


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    """Ensure settings cache is cleared before and after each test."""
    set_settings(None)
    yield
    set_settings(None)


def _make_settings(tmp_path: Path, **overrides: Any) -> Settings:
    values: dict[str, Any] = {"database_path": tmp_path / "meetings.db"}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return _make_settings(tmp_path)


@pytest.fixture
def store(settings: Settings) -> Iterator[MeetingStore]:
    meeting_store = MeetingStore(settings.database_path).open()
    yield meeting_store
    meeting_store.close()


class FakeCompletion:
    """Records requests and answers with a canned chat completion payload."""

    def __init__(self, content: str | None = "- Decision: ship in March") -> None:
        self.content = content
        self.calls: list[Sequence[Mapping[str, str]]] = []
        self.error: Exception | None = None

    def __call__(
        self, *, messages: Sequence[Mapping[str, str]], config: ChatCompletionConfig
    ) -> Mapping[str, Any]:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        if self.content is None:
            return {"id": "cmpl-empty", "choices": []}
        return {
            "id": "cmpl-1",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": self.content}}],
        }


class FakeMailer:
    sender = "team@example.com"

    def __init__(self, failing: set[str] | None = None) -> None:
        self.sent: list[EmailMessage] = []
        self.failing = failing or set()

    def send(self, message: EmailMessage) -> None:
        if message["To"] in self.failing:
            raise MailDeliveryError(f"Failed to deliver mail to {message['To']}")
        self.sent.append(message)

    @property
    def recipients(self) -> list[str]:
        return [str(message["To"]) for message in self.sent]


@pytest.fixture
def fake_completion() -> FakeCompletion:
    return FakeCompletion()


@pytest.fixture
def completion_provider(fake_completion: FakeCompletion) -> Configured[ChatCompletionClient]:
    config = ChatCompletionConfig(api_key="test-key")
    return Configured(ChatCompletionClient(config, request_fn=fake_completion))


@pytest.fixture
def fake_mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def mailer_factory() -> type[FakeMailer]:
    return FakeMailer
