"""Typed responses for the auxiliary backend endpoints."""

from __future__ import annotations

from pydantic import Field

from chatsync.models._base import ChatSyncBaseModel, ResponseModel
from chatsync.models.snapshot import Channel


class HealthStatus(ChatSyncBaseModel):
    """Result of a connectivity probe.

    Parameters
    ----------
    connected : bool
        ``True`` only when the backend reported a healthy status.
    latency_ms : float
        Round-trip time of the probe in milliseconds.
    error : str or None
        Human-readable failure reason, ``None`` when healthy.
    """

    connected: bool
    latency_ms: float
    error: str | None = None


class VerificationStatus(ResponseModel):
    """AI verification status reported by ``/api/ai-verification``."""

    verified: bool = False
    status: str = ""


class TranscriptEntry(ResponseModel):
    """One utterance from the dictation feed."""

    speaker: str = Field(alias="Speaker")
    text: str = Field(default="", alias="Text")


class LastUserMessage(ChatSyncBaseModel):
    """Most recent non-blank text written to a channel."""

    text: str
    channel: Channel

    @property
    def sender(self) -> str:
        return self.channel.sender
