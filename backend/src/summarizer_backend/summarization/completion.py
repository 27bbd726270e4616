"""Chat-completion client for OpenAI-compatible endpoints (Groq by default)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

import httpx

from .prompt import build_summary_messages

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "No summary generated"


@dataclass(slots=True)
class ChatCompletionConfig:
    """Configuration for invoking the chat completion API."""

    api_key: str
    model: str = "llama3-8b-8192"
    base_url: str = "https://api.groq.com/openai/v1"
    temperature: float = 0.3
    max_output_tokens: int = 2048
    request_timeout_seconds: float = 120.0
    user_agent: str | None = "MeetingSummarizer/0.1"

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key must be provided for summarization.")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive.")
        if self.max_output_tokens <= 0:
            raise ValueError("max_output_tokens must be positive.")


class SummarizationError(RuntimeError):
    """Raised when the completion call fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CompletionRequestFn(Protocol):  # pragma: no cover - Protocol runtime helper
    def __call__(
        self,
        *,
        messages: Sequence[Mapping[str, str]],
        config: ChatCompletionConfig,
    ) -> Mapping[str, Any]: ...


class ChatCompletionClient:
    """Sends one summary request per call; there is no retry."""

    def __init__(
        self,
        config: ChatCompletionConfig,
        *,
        request_fn: CompletionRequestFn | None = None,
    ) -> None:
        self.config = config
        self._request_fn = request_fn or _call_chat_completion_api

    def summarize(self, transcript: str, instructions: str) -> str:
        messages = build_summary_messages(transcript, instructions)
        try:
            payload = self._request_fn(messages=messages, config=self.config)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise SummarizationError(
                f"Summarization call failed with status {status}",
                status_code=status,
            ) from exc
        except httpx.RequestError as exc:
            raise SummarizationError(
                "Summarization request failed due to network error"
            ) from exc
        except ValueError as exc:
            raise SummarizationError("Completion response was not valid JSON.") from exc

        if not isinstance(payload, Mapping):
            raise SummarizationError("Completion response must be a mapping.")

        content = _extract_message_content(payload)
        if content is None:
            logger.warning(
                "Completion %s returned no content; using fallback summary",
                payload.get("id"),
            )
            return FALLBACK_SUMMARY
        return content


def _call_chat_completion_api(
    *,
    messages: Sequence[Mapping[str, str]],
    config: ChatCompletionConfig,
) -> Mapping[str, Any]:
    url = f"{config.base_url.rstrip('/')}/chat/completions"
    headers = {
        "Authorization": f"Bearer {config.api_key}",
    }
    if config.user_agent:
        headers["User-Agent"] = config.user_agent

    payload = {
        "model": config.model,
        "messages": list(messages),
        "temperature": config.temperature,
        "max_tokens": config.max_output_tokens,
    }

    response = httpx.post(
        url,
        headers=headers,
        json=payload,
        timeout=config.request_timeout_seconds,
    )
    response.raise_for_status()

    data = response.json()
    if not isinstance(data, Mapping):
        raise SummarizationError("Unexpected response payload from completion API.")
    return data


def _extract_message_content(payload: Mapping[str, Any]) -> str | None:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None

    first = choices[0]
    if not isinstance(first, Mapping):
        return None
    message = first.get("message")
    if not isinstance(message, Mapping):
        return None

    content = message.get("content")
    if isinstance(content, str) and content:
        return content
    if isinstance(content, list):
        joined = "".join(
            chunk.get("text", "")
            for chunk in content
            if isinstance(chunk, Mapping) and isinstance(chunk.get("text"), str)
        )
        if joined:
            return joined
    return None


__all__ = [
    "FALLBACK_SUMMARY",
    "ChatCompletionClient",
    "ChatCompletionConfig",
    "CompletionRequestFn",
    "SummarizationError",
]
