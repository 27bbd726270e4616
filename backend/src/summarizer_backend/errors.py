"""HTTP-facing error taxonomy shared by the routers."""

from __future__ import annotations

from typing import Any

from fastapi import status


class ApiError(Exception):
    """Base class for failures rendered as ``{"error": message}`` responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, **self.extra}


class ValidationError(ApiError):
    """A required field was missing or blank."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ServiceUnavailableError(ApiError):
    """An external credential is missing; the operation was skipped."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str, **extra: Any) -> None:
        extra.setdefault("demo", True)
        super().__init__(message, **extra)


class UpstreamError(ApiError):
    """The completion or email provider raised."""


class StoreFailure(ApiError):
    """A read or write against the relational store failed."""


__all__ = [
    "ApiError",
    "NotFoundError",
    "ServiceUnavailableError",
    "StoreFailure",
    "UpstreamError",
    "ValidationError",
]
