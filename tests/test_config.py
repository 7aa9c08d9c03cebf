from __future__ import annotations

from pathlib import Path

import pytest

from chatsync.config import ChatSyncConfig, _env_bool
from chatsync.exceptions import ChatSyncConfigError

_ENV_KEYS = (
    "CHATSYNC_BASE_URL",
    "CHATSYNC_GLOBALS_ENDPOINT",
    "CHATSYNC_STORAGE_PATH",
    "CHATSYNC_POLL_INTERVAL",
    "CHATSYNC_TRANSCRIPT_INTERVAL",
    "CHATSYNC_REQUEST_TIMEOUT",
    "CHATSYNC_STRICT_FIELDS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = ChatSyncConfig()
    assert config.base_url == "http://localhost:5000"
    assert config.globals_endpoint == "/api/globals"
    assert config.poll_interval == 2.0
    assert config.transcript_interval == 0.5
    assert config.strict_fields is False
    assert config.storage_path.is_absolute()


def test_trailing_slash_is_stripped() -> None:
    assert ChatSyncConfig(base_url="http://backend:8000/").base_url == "http://backend:8000"


@pytest.mark.parametrize("field", ["poll_interval", "transcript_interval", "request_timeout"])
def test_non_positive_intervals_are_rejected(field: str) -> None:
    with pytest.raises(ChatSyncConfigError, match=field):
        ChatSyncConfig(**{field: 0})


def test_relative_endpoint_is_rejected() -> None:
    with pytest.raises(ChatSyncConfigError):
        ChatSyncConfig(globals_endpoint="api/globals")


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CHATSYNC_BASE_URL", "http://backend:8000/")
    monkeypatch.setenv("CHATSYNC_GLOBALS_ENDPOINT", "/api/variables")
    monkeypatch.setenv("CHATSYNC_STORAGE_PATH", str(tmp_path / "storage.json"))
    monkeypatch.setenv("CHATSYNC_POLL_INTERVAL", "5")
    monkeypatch.setenv("CHATSYNC_TRANSCRIPT_INTERVAL", "0.25")
    monkeypatch.setenv("CHATSYNC_STRICT_FIELDS", "yes")

    config = ChatSyncConfig.from_env()

    assert config.base_url == "http://backend:8000"
    assert config.globals_endpoint == "/api/variables"
    assert config.storage_path == tmp_path / "storage.json"
    assert config.poll_interval == 5.0
    assert config.transcript_interval == 0.25
    assert config.strict_fields is True


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHATSYNC_POLL_INTERVAL", "5")
    monkeypatch.setenv("CHATSYNC_STRICT_FIELDS", "1")

    config = ChatSyncConfig.from_env(poll_interval=1.0, strict_fields=False)

    assert config.poll_interval == 1.0
    assert config.strict_fields is False


def test_from_env_bad_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHATSYNC_REQUEST_TIMEOUT", "soon")
    with pytest.raises(ChatSyncConfigError, match="CHATSYNC_REQUEST_TIMEOUT"):
        ChatSyncConfig.from_env()


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, False), ("TRUE", True), (" on ", True), ("0", False), ("off", False), ("garbage", False)],
)
def test_env_bool(value: str | None, expected: bool) -> None:
    assert _env_bool(value, False) is expected
