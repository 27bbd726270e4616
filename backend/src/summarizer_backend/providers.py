# Resolve optional external providers from settings once, at startup.

from __future__ import annotations

import logging

from .capabilities import Capability, Configured, Unconfigured
from .settings import Settings
from .sharing import MailSender, SmtpMailConfig, SmtpMailer
from .summarization import ChatCompletionClient, ChatCompletionConfig

logger = logging.getLogger(__name__)

COMPLETION_UNCONFIGURED = (
    "AI service not available. Please configure GROQ_API_KEY in your environment"
    " variables."
)
EMAIL_UNCONFIGURED = (
    "Email service not configured. Please set EMAIL_USER and EMAIL_PASS in your"
    " environment variables."
)


def resolve_completion_provider(settings: Settings) -> Capability[ChatCompletionClient]:
    if not settings.llm_configured:
        logger.warning(
            "GROQ_API_KEY is not configured; summary generation will answer in demo mode."
        )
        return Unconfigured(COMPLETION_UNCONFIGURED)

    config = ChatCompletionConfig(
        api_key=settings.llm_api_key,
        model=settings.llm_model,
        base_url=settings.llm_base_url,
        temperature=settings.llm_temperature,
        max_output_tokens=settings.llm_max_output_tokens,
        request_timeout_seconds=settings.llm_request_timeout_seconds,
        user_agent=settings.llm_user_agent,
    )
    return Configured(ChatCompletionClient(config))


def resolve_mail_provider(settings: Settings) -> Capability[MailSender]:
    if not settings.email_configured:
        logger.warning(
            "EMAIL_USER/EMAIL_PASS are not configured; sharing will answer in demo mode."
        )
        return Unconfigured(EMAIL_UNCONFIGURED)

    config = SmtpMailConfig(
        username=settings.email_user,
        password=settings.email_password,
        host=settings.smtp_host,
        port=settings.smtp_port,
        timeout_seconds=settings.smtp_timeout_seconds,
    )
    return Configured(SmtpMailer(config))


__all__ = [
    "COMPLETION_UNCONFIGURED",
    "EMAIL_UNCONFIGURED",
    "resolve_completion_provider",
    "resolve_mail_provider",
]
