"""HTTP client for the summarizer REST surface."""

from __future__ import annotations

from typing import Any

import httpx


class ApiRequestError(RuntimeError):
    """Raised when the server answers with an error status or cannot be reached.

    ``message`` carries the server's ``error`` text when the body has one.
    """

    def __init__(
        self,
        message: str | None,
        *,
        status_code: int | None = None,
        demo: bool = False,
    ) -> None:
        super().__init__(message or f"Request failed with status {status_code}")
        self.message = message
        self.status_code = status_code
        self.demo = demo


class SummarizerApiClient:
    """Thin synchronous wrapper; one request per method call.

    ``http_client`` lets callers supply a preconfigured client (for example a
    FastAPI ``TestClient``), in which case ``base_url`` is ignored.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        *,
        timeout: float = 180.0,
        transport: httpx.BaseTransport | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._client = http_client or httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SummarizerApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise ApiRequestError(None) from exc

        if response.is_error:
            message = None
            demo = False
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                error = body.get("error")
                message = error if isinstance(error, str) else None
                demo = bool(body.get("demo"))
            raise ApiRequestError(message, status_code=response.status_code, demo=demo)
        return response.json()

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/api/health")

    def upload_transcript(
        self, filename: str, data: bytes, content_type: str = "text/plain"
    ) -> dict[str, Any]:
        return self._request(
            "POST",
            "/api/upload-transcript",
            files={"transcript": (filename, data, content_type)},
        )

    def generate_summary(self, transcript: str, prompt: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/api/generate-summary",
            json={"transcript": transcript, "prompt": prompt},
        )

    def get_meeting(self, meeting_id: int) -> dict[str, Any]:
        return self._request("GET", f"/api/meeting/{meeting_id}")

    def update_summary(self, meeting_id: int, summary: str) -> dict[str, Any]:
        return self._request(
            "PUT", f"/api/meeting/{meeting_id}/summary", json={"summary": summary}
        )

    def share_summary(
        self, meeting_id: int, recipient_emails: str, summary: str
    ) -> dict[str, Any]:
        return self._request(
            "POST",
            "/api/share-summary",
            json={
                "meetingId": meeting_id,
                "recipientEmails": recipient_emails,
                "summary": summary,
            },
        )

    def list_meetings(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/meetings")


__all__ = ["ApiRequestError", "SummarizerApiClient"]
