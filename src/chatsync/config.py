"""Client configuration for chatsync."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from chatsync._constants import (
    BASE_URL,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TRANSCRIPT_INTERVAL,
    GLOBALS_ENDPOINT,
)
from chatsync.exceptions import ChatSyncConfigError

DEFAULT_STORAGE_PATH = Path("~/.config/chatsync/storage.json")


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ChatSyncConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ChatSyncConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Backend base URL. A trailing slash is stripped.
    globals_endpoint : str
        Path of the shared-state resource (``/api/globals`` or the older
        ``/api/variables``).
    poll_interval : float
        Seconds between shared-state polls.
    transcript_interval : float
        Seconds between transcript polls while dictation is running.
    request_timeout : float
        Total timeout in seconds applied to every HTTP request.
    strict_fields : bool
        When ``True``, setting an unknown snapshot field raises
        :class:`~chatsync.exceptions.UnknownFieldError` instead of being
        ignored.
    storage_path : Path
        JSON file backing :class:`~chatsync.local_storage.LocalStorage`.
    """

    base_url: str = BASE_URL
    globals_endpoint: str = GLOBALS_ENDPOINT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    transcript_interval: float = DEFAULT_TRANSCRIPT_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    strict_fields: bool = False
    storage_path: Path = DEFAULT_STORAGE_PATH

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "storage_path", Path(self.storage_path).expanduser())
        if not self.globals_endpoint.startswith("/"):
            raise ChatSyncConfigError(f"globals_endpoint must start with '/', got {self.globals_endpoint!r}")
        for name in ("poll_interval", "transcript_interval", "request_timeout"):
            if getattr(self, name) <= 0:
                raise ChatSyncConfigError(f"{name} must be positive, got {getattr(self, name)}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ChatSyncConfig:
        """Create configuration from environment variables.

        Reads the optional ``CHATSYNC_*`` variables. Explicit keyword
        arguments override environment values.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "CHATSYNC_BASE_URL": "base_url",
            "CHATSYNC_GLOBALS_ENDPOINT": "globals_endpoint",
            "CHATSYNC_STORAGE_PATH": "storage_path",
        }
        _ENV_FLOAT_MAP = {
            "CHATSYNC_POLL_INTERVAL": "poll_interval",
            "CHATSYNC_TRANSCRIPT_INTERVAL": "transcript_interval",
            "CHATSYNC_REQUEST_TIMEOUT": "request_timeout",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = val

        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        if "strict_fields" not in overrides:
            config_kwargs["strict_fields"] = _env_bool(env.get("CHATSYNC_STRICT_FIELDS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
