"""Prompt construction for the summary completion call."""

from __future__ import annotations

SYSTEM_PROMPT = (
    "You are an expert meeting summarizer. Generate a structured summary based on"
    " the user's instructions. Always maintain professionalism and clarity."
    " Format your response appropriately based on the user's request."
)


def build_user_prompt(transcript: str, instructions: str) -> str:
    # Both inputs are interpolated verbatim.
    return (
        f"Transcript: {transcript}\n\n"
        f"Instructions: {instructions}\n\n"
        "Please provide a structured summary based on these instructions."
    )


def build_summary_messages(transcript: str, instructions: str) -> list[dict[str, str]]:
    """Return the system and user chat messages for a summary request."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(transcript, instructions)},
    ]


__all__ = ["SYSTEM_PROMPT", "build_summary_messages", "build_user_prompt"]
