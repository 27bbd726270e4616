"""Client-side session state and REST client."""

from .api import ApiRequestError, SummarizerApiClient
from .shell import ClientShell, MessageKind, PendingUpload, ShellState, StatusMessage

__all__ = [
    "ApiRequestError",
    "ClientShell",
    "MessageKind",
    "PendingUpload",
    "ShellState",
    "StatusMessage",
    "SummarizerApiClient",
]
