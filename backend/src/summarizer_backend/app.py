# Application factory and FastAPI setup.

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .capabilities import Capability
from .errors import ApiError
from .providers import resolve_completion_provider, resolve_mail_provider
from .routers import health, meetings, sharing, summaries, transcripts
from .settings import Settings, get_settings
from .sharing import MailSender
from .storage import MeetingStore
from .summarization import ChatCompletionClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    store: MeetingStore = app.state.store
    store.open()
    try:
        yield
    finally:
        store.close()


async def _handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request: {detail}"},
    )


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app(
    settings: Settings | None = None,
    *,
    store: MeetingStore | None = None,
    completion_provider: Capability[ChatCompletionClient] | None = None,
    mail_provider: Capability[MailSender] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Collaborators default to ones built from ``settings``; tests pass their own.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Meeting Summarizer Backend",
        version="0.1.0",
        lifespan=_lifespan,
    )
    app.state.settings = settings
    app.state.store = store or MeetingStore(settings.database_path)
    app.state.completion_provider = (
        completion_provider or resolve_completion_provider(settings)
    )
    app.state.mail_provider = mail_provider or resolve_mail_provider(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ApiError, _handle_api_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)

    app.include_router(health.router)
    app.include_router(transcripts.router)
    app.include_router(summaries.router)
    app.include_router(meetings.router)
    app.include_router(sharing.router)
    return app


__all__ = ["create_app"]
