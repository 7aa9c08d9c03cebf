"""Tests for the snapshot model and its wire format."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chatsync._constants import DEFAULT_EXPLANATION
from chatsync.exceptions import ChatSyncParseError
from chatsync.models.snapshot import Channel, SharedStateSnapshot, SnapshotField


def _wire(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "personOneInput": "a",
        "personTwoInput": "b",
        "truthVerification": None,
        "chatExplanation": "X",
    }
    payload.update(overrides)
    return payload


class TestDefaults:
    def test_default_snapshot(self) -> None:
        snapshot = SharedStateSnapshot()
        assert snapshot.channel_a_text == ""
        assert snapshot.channel_b_text == ""
        assert snapshot.verification is None
        assert snapshot.explanation == DEFAULT_EXPLANATION

    def test_snapshot_is_frozen(self) -> None:
        snapshot = SharedStateSnapshot()
        with pytest.raises(ValidationError):
            snapshot.channel_a_text = "x"  # type: ignore[misc]


class TestWireFormat:
    def test_from_wire_maps_aliases(self) -> None:
        snapshot = SharedStateSnapshot.from_wire(_wire(truthVerification=True))
        assert snapshot.channel_a_text == "a"
        assert snapshot.channel_b_text == "b"
        assert snapshot.verification is True
        assert snapshot.explanation == "X"

    def test_from_wire_ignores_extra_keys(self) -> None:
        snapshot = SharedStateSnapshot.from_wire(_wire(updatedAt="2026-01-01"))
        assert snapshot == SharedStateSnapshot.from_wire(_wire())

    def test_from_wire_requires_every_key(self) -> None:
        payload = _wire()
        del payload["truthVerification"]
        with pytest.raises(ChatSyncParseError, match="truthVerification"):
            SharedStateSnapshot.from_wire(payload, endpoint="/api/globals")

    def test_from_wire_rejects_non_object(self) -> None:
        with pytest.raises(ChatSyncParseError):
            SharedStateSnapshot.from_wire(["not", "an", "object"])

    def test_from_wire_rejects_wrong_types(self) -> None:
        with pytest.raises(ChatSyncParseError):
            SharedStateSnapshot.from_wire(_wire(personOneInput=12))

    def test_to_wire_serializes_tri_state(self) -> None:
        for value in (True, False, None):
            wire = SharedStateSnapshot(verification=value).to_wire()
            assert wire["truthVerification"] is value
        assert set(SharedStateSnapshot().to_wire()) == {
            "personOneInput",
            "personTwoInput",
            "truthVerification",
            "chatExplanation",
        }


class TestFields:
    def test_resolve_accepts_all_spellings(self) -> None:
        assert SnapshotField.resolve("channel_a_text") is SnapshotField.CHANNEL_A_TEXT
        assert SnapshotField.resolve("channelAText") is SnapshotField.CHANNEL_A_TEXT
        assert SnapshotField.resolve("personOneInput") is SnapshotField.CHANNEL_A_TEXT
        assert SnapshotField.resolve(SnapshotField.EXPLANATION) is SnapshotField.EXPLANATION
        assert SnapshotField.resolve("nope") is None

    def test_wire_names(self) -> None:
        assert SnapshotField.VERIFICATION.wire_name == "truthVerification"
        assert SnapshotField.CHANNEL_B_TEXT.wire_name == "personTwoInput"

    def test_changed_fields(self) -> None:
        base = SharedStateSnapshot(explanation="X")
        other = SharedStateSnapshot(explanation="X", channel_b_text="hi", verification=False)
        assert base.changed_fields(base) == frozenset()
        assert base.changed_fields(other) == {SnapshotField.CHANNEL_B_TEXT, SnapshotField.VERIFICATION}

    def test_channels_map_to_fields_and_senders(self) -> None:
        assert Channel.A.field is SnapshotField.CHANNEL_A_TEXT
        assert Channel.B.field is SnapshotField.CHANNEL_B_TEXT
        assert Channel.A.sender == "left"
        assert Channel.B.sender == "right"
        snapshot = SharedStateSnapshot(channel_a_text="x", channel_b_text="y")
        assert snapshot.text_for(Channel.A) == "x"
        assert snapshot.text_for(Channel.B) == "y"

    def test_verification_label(self) -> None:
        assert SharedStateSnapshot(verification=True).verification_label == "VERIFIED TRUE"
        assert SharedStateSnapshot(verification=False).verification_label == "FLAGGED FALSE"
        assert SharedStateSnapshot().verification_label == "ANALYZING..."
