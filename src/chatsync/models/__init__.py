"""Data models for chatsync."""

from chatsync.models._base import ChatSyncBaseModel, ResponseModel
from chatsync.models.responses import HealthStatus, LastUserMessage, TranscriptEntry, VerificationStatus
from chatsync.models.snapshot import Channel, SharedStateSnapshot, SnapshotField

__all__ = [
    "Channel",
    "ChatSyncBaseModel",
    "HealthStatus",
    "LastUserMessage",
    "ResponseModel",
    "SharedStateSnapshot",
    "SnapshotField",
    "TranscriptEntry",
    "VerificationStatus",
]
