"""Client-local key/value settings persisted as a JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from chatsync._constants import API_KEY_STORAGE_KEY
from chatsync.config import ChatSyncConfig
from chatsync.exceptions import ChatSyncConfigError

_logger = logging.getLogger(__name__)


class LocalStorage:
    """String values stored under well-known keys in a single JSON object file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path).expanduser()

    @classmethod
    def from_config(cls, config: ChatSyncConfig) -> LocalStorage:
        return cls(config.storage_path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ChatSyncConfigError(f"Invalid storage JSON in {self._path}") from exc
        if not isinstance(data, dict):
            raise ChatSyncConfigError(f"Storage file {self._path} must contain an object")
        return {str(key): str(value) for key, value in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)
        _logger.debug("Stored local setting %s", key)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def get_api_key(self) -> str | None:
        """Return the stored text-to-speech API key, if any."""
        return self.get_item(API_KEY_STORAGE_KEY) or None

    def set_api_key(self, key: str) -> bool:
        """Store *key*; blank keys are ignored. Returns whether it was stored."""
        if not key:
            return False
        self.set_item(API_KEY_STORAGE_KEY, key)
        return True

    @property
    def has_api_key(self) -> bool:
        return self.get_api_key() is not None
