"""Typed change notifications emitted by the state store."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chatsync.models.snapshot import SharedStateSnapshot, SnapshotField


class ChangeSource(StrEnum):
    REMOTE = "remote"
    LOCAL = "local"


class StateChange(BaseModel):
    """A snapshot replacement delivered to store subscribers."""

    model_config = ConfigDict(frozen=True)

    previous: SharedStateSnapshot
    current: SharedStateSnapshot
    changed_fields: frozenset[SnapshotField]
    source: ChangeSource = ChangeSource.REMOTE
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("observed_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


StateListener = Callable[[StateChange], None]
