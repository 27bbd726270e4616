# Application-wide configuration helpers.

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_SETTINGS_CACHE: Settings | None = None

_BACKEND_ROOT = Path(__file__).resolve().parents[2]

# Values shipped in the sample .env that mean "not configured".
_PLACEHOLDER_VALUES = {
    "your_groq_api_key_here",
    "your_gmail_app_password_here",
}

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def _optional_secret(name: str) -> str | None:
    value = os.getenv(name)
    if not value or value in _PLACEHOLDER_VALUES:
        return None
    return value


def _int_from_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer.") from exc


def _float_from_env(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be numeric.") from exc


@dataclass(slots=True)
class Settings:
    """Runtime configuration derived from environment variables."""

    database_path: Path
    port: int = 5000
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    log_level: str = "INFO"
    llm_api_key: str | None = None
    llm_base_url: str = "https://api.groq.com/openai/v1"
    llm_model: str = "llama3-8b-8192"
    llm_temperature: float = 0.3
    llm_max_output_tokens: int = 2048
    llm_request_timeout_seconds: float = 120.0
    llm_user_agent: str | None = "MeetingSummarizer/0.1"
    email_user: str | None = None
    email_password: str | None = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_timeout_seconds: float = 30.0

    @property
    def llm_configured(self) -> bool:
        return bool(self.llm_api_key)

    @property
    def email_configured(self) -> bool:
        return bool(self.email_user and self.email_password)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables with sensible defaults."""
        database_override = os.getenv("SUMMARIZER_DATABASE_PATH")
        if database_override:
            database_path = Path(database_override).expanduser()
        else:
            database_path = _BACKEND_ROOT / "meetings.db"

        port = _int_from_env("PORT", "5000")
        max_upload_bytes = _int_from_env(
            "SUMMARIZER_MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES)
        )
        if max_upload_bytes <= 0:
            raise ValueError("SUMMARIZER_MAX_UPLOAD_BYTES must be positive.")

        log_level = os.getenv("SUMMARIZER_LOG_LEVEL", "INFO").upper()

        llm_base_url = os.getenv(
            "SUMMARIZER_LLM_BASE_URL", "https://api.groq.com/openai/v1"
        )
        llm_model = os.getenv("SUMMARIZER_LLM_MODEL", "llama3-8b-8192")
        llm_temperature = _float_from_env("SUMMARIZER_LLM_TEMPERATURE", "0.3")
        llm_max_output_tokens = _int_from_env("SUMMARIZER_LLM_MAX_TOKENS", "2048")
        llm_timeout = _float_from_env("SUMMARIZER_LLM_TIMEOUT", "120")
        llm_user_agent = (
            os.getenv("SUMMARIZER_LLM_USER_AGENT", "MeetingSummarizer/0.1") or None
        )

        smtp_host = os.getenv("SUMMARIZER_SMTP_HOST", "smtp.gmail.com")
        smtp_port = _int_from_env("SUMMARIZER_SMTP_PORT", "465")
        smtp_timeout = _float_from_env("SUMMARIZER_SMTP_TIMEOUT", "30")

        return cls(
            database_path=database_path.resolve(strict=False),
            port=port,
            max_upload_bytes=max_upload_bytes,
            log_level=log_level,
            llm_api_key=_optional_secret("GROQ_API_KEY"),
            llm_base_url=llm_base_url,
            llm_model=llm_model,
            llm_temperature=llm_temperature,
            llm_max_output_tokens=llm_max_output_tokens,
            llm_request_timeout_seconds=llm_timeout,
            llm_user_agent=llm_user_agent,
            email_user=os.getenv("EMAIL_USER") or None,
            email_password=_optional_secret("EMAIL_PASS"),
            smtp_host=smtp_host,
            smtp_port=smtp_port,
            smtp_timeout_seconds=smtp_timeout,
        )


def load_dotenv_if_present(path: Path | None = None) -> None:
    """Populate os.environ from a simple KEY=VALUE file without overriding."""
    dotenv_path = path or (_BACKEND_ROOT / ".env")
    if not dotenv_path.exists():
        return

    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        cleaned = value.strip().strip('"').strip("'")
        os.environ.setdefault(key, cleaned)


def get_settings() -> Settings:
    """Return cached settings instance, constructing it on first access."""
    global _SETTINGS_CACHE

    if _SETTINGS_CACHE is None:
        _SETTINGS_CACHE = Settings.from_env()

    return _SETTINGS_CACHE


def set_settings(settings: Settings | None) -> None:
    """Override the cached settings value (mainly intended for tests)."""
    global _SETTINGS_CACHE
    _SETTINGS_CACHE = settings


__all__ = [
    "DEFAULT_MAX_UPLOAD_BYTES",
    "Settings",
    "get_settings",
    "load_dotenv_if_present",
    "set_settings",
]
