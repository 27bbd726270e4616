# FastAPI dependencies exposing objects built by create_app.

from __future__ import annotations

from fastapi import Request

from .capabilities import Capability
from .settings import Settings
from .sharing import MailSender
from .storage import MeetingStore
from .summarization import ChatCompletionClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> MeetingStore:
    return request.app.state.store


def get_completion_provider(request: Request) -> Capability[ChatCompletionClient]:
    return request.app.state.completion_provider


def get_mail_provider(request: Request) -> Capability[MailSender]:
    return request.app.state.mail_provider


__all__ = [
    "get_app_settings",
    "get_completion_provider",
    "get_mail_provider",
    "get_store",
]
