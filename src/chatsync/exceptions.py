"""Custom exception hierarchy for chatsync."""

from __future__ import annotations


class ChatSyncError(Exception):
    """Base exception for all chatsync errors."""


class ChatSyncConfigError(ChatSyncError):
    """Invalid or missing configuration."""


class ChatSyncTransportError(ChatSyncError):
    """HTTP-level failure (network, timeout, non-2xx status)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ChatSyncParseError(ChatSyncError):
    """Response body is not valid JSON or lacks expected fields."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class UnknownFieldError(ChatSyncError):
    """A snapshot field name was not recognised (strict mode only)."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown snapshot field: {name!r}")
