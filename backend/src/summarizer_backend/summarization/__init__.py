"""Meeting summarization helpers."""

from .completion import (
    FALLBACK_SUMMARY,
    ChatCompletionClient,
    ChatCompletionConfig,
    CompletionRequestFn,
    SummarizationError,
)
from .prompt import SYSTEM_PROMPT, build_summary_messages, build_user_prompt
from .service import GeneratedSummary, summarize_and_store

__all__ = [
    "FALLBACK_SUMMARY",
    "SYSTEM_PROMPT",
    "ChatCompletionClient",
    "ChatCompletionConfig",
    "CompletionRequestFn",
    "GeneratedSummary",
    "SummarizationError",
    "build_summary_messages",
    "build_user_prompt",
    "summarize_and_store",
]
