"""chatsync - Async shared-state and transcript sync client for the chat backend."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("chatsync")
except PackageNotFoundError:
    __version__ = "0+local"
from chatsync.client import ChatSyncClient
from chatsync.config import ChatSyncConfig
from chatsync.exceptions import (
    ChatSyncConfigError,
    ChatSyncError,
    ChatSyncParseError,
    ChatSyncTransportError,
    UnknownFieldError,
)
from chatsync.local_storage import LocalStorage
from chatsync.models import (
    Channel,
    HealthStatus,
    LastUserMessage,
    SharedStateSnapshot,
    SnapshotField,
    TranscriptEntry,
    VerificationStatus,
)
from chatsync.polling import PollingScheduler
from chatsync.remote import RemoteSyncClient
from chatsync.state.events import ChangeSource, StateChange
from chatsync.state.store import SharedStateStore
from chatsync.transcript import TranscriptReconciler, channel_from_speaker

__all__ = [
    "__version__",
    "Channel",
    "ChangeSource",
    "ChatSyncClient",
    "ChatSyncConfig",
    "ChatSyncConfigError",
    "ChatSyncError",
    "ChatSyncParseError",
    "ChatSyncTransportError",
    "HealthStatus",
    "LastUserMessage",
    "LocalStorage",
    "PollingScheduler",
    "RemoteSyncClient",
    "SharedStateSnapshot",
    "SharedStateStore",
    "SnapshotField",
    "StateChange",
    "TranscriptEntry",
    "TranscriptReconciler",
    "UnknownFieldError",
    "VerificationStatus",
    "channel_from_speaker",
]
