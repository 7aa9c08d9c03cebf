"""Shared-state snapshot model."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import Field, ValidationError
from pydantic.alias_generators import to_camel

from chatsync._constants import DEFAULT_EXPLANATION
from chatsync.exceptions import ChatSyncParseError
from chatsync.models._base import ChatSyncBaseModel


class SnapshotField(StrEnum):
    """Names of the fields of :class:`SharedStateSnapshot`."""

    CHANNEL_A_TEXT = "channel_a_text"
    CHANNEL_B_TEXT = "channel_b_text"
    VERIFICATION = "verification"
    EXPLANATION = "explanation"

    @property
    def wire_name(self) -> str:
        """JSON key used by the backend for this field."""
        alias = SharedStateSnapshot.model_fields[self.value].alias
        return alias or self.value

    @classmethod
    def resolve(cls, name: str) -> SnapshotField | None:
        """Look up a field by python name, camelCase name or wire name."""
        return _FIELD_LOOKUP.get(str(name))


class Channel(StrEnum):
    """An independent dictation stream (one speaker)."""

    A = "A"
    B = "B"

    @property
    def field(self) -> SnapshotField:
        """Snapshot field holding this channel's text."""
        return _CHANNEL_FIELDS[self]

    @property
    def sender(self) -> str:
        """Sender name used by the cap-check endpoint."""
        return _CHANNEL_SENDERS[self]


_CHANNEL_FIELDS: dict[Channel, SnapshotField] = {
    Channel.A: SnapshotField.CHANNEL_A_TEXT,
    Channel.B: SnapshotField.CHANNEL_B_TEXT,
}

_CHANNEL_SENDERS: dict[Channel, str] = {
    Channel.A: "left",
    Channel.B: "right",
}


class SharedStateSnapshot(ChatSyncBaseModel):
    """The complete shared-state record at a point in time.

    Instances are immutable; the store replaces its snapshot on every
    change, so any reference handed out is a stable read-only view.
    """

    channel_a_text: str = Field(default="", alias="personOneInput")
    channel_b_text: str = Field(default="", alias="personTwoInput")
    verification: bool | None = Field(default=None, alias="truthVerification")
    """``True`` = factual, ``False`` = flagged, ``None`` = unknown."""
    explanation: str = Field(default=DEFAULT_EXPLANATION, alias="chatExplanation")

    @classmethod
    def from_wire(cls, payload: Any, *, endpoint: str = "") -> SharedStateSnapshot:
        """Parse a backend payload, requiring every snapshot key to be present."""
        if not isinstance(payload, Mapping):
            raise ChatSyncParseError(
                f"Snapshot payload from {endpoint or 'backend'} is not an object",
                endpoint=endpoint,
            )
        missing = [field.wire_name for field in SnapshotField if field.wire_name not in payload]
        if missing:
            raise ChatSyncParseError(
                f"Snapshot payload from {endpoint or 'backend'} is missing {', '.join(missing)}",
                endpoint=endpoint,
            )
        try:
            return cls.model_validate({field.wire_name: payload[field.wire_name] for field in SnapshotField})
        except ValidationError as exc:
            raise ChatSyncParseError(
                f"Snapshot payload from {endpoint or 'backend'} is invalid: {exc.error_count()} error(s)",
                endpoint=endpoint,
            ) from exc

    def to_wire(self) -> dict[str, Any]:
        """Return the backend JSON representation."""
        return self.model_dump(by_alias=True)

    def text_for(self, channel: Channel) -> str:
        return str(getattr(self, channel.field.value))

    def changed_fields(self, other: SharedStateSnapshot) -> frozenset[SnapshotField]:
        """Fields whose values differ between this snapshot and *other*."""
        return frozenset(field for field in SnapshotField if getattr(self, field.value) != getattr(other, field.value))

    @property
    def verification_label(self) -> str:
        if self.verification is True:
            return "VERIFIED TRUE"
        if self.verification is False:
            return "FLAGGED FALSE"
        return "ANALYZING..."


_FIELD_LOOKUP: dict[str, SnapshotField] = {}
for _field in SnapshotField:
    _FIELD_LOOKUP[_field.value] = _field
    _FIELD_LOOKUP[_field.wire_name] = _field
    _FIELD_LOOKUP[to_camel(_field.value)] = _field
del _field
