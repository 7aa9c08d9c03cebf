"""Snapshot export helpers for debugging and hand-off."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

from chatsync.models.snapshot import SharedStateSnapshot


def _wire_value(value: bool | None) -> str:
    return json.dumps(value)


def snapshot_to_text(snapshot: SharedStateSnapshot, *, generated_at: datetime | None = None) -> str:
    """Render *snapshot* as the plain-text export format."""
    generated = (generated_at or datetime.now(UTC)).isoformat()
    return (
        "Global Variables Export\n"
        f"Generated: {generated}\n"
        "\n"
        f"Person One Input: {snapshot.channel_a_text}\n"
        f"Person Two Input: {snapshot.channel_b_text}\n"
        f"Truth Verification: {_wire_value(snapshot.verification)}\n"
        f"Chat Explanation: {snapshot.explanation}\n"
    )


def export_json(snapshot: SharedStateSnapshot, path: Path | str = "global_variables.json") -> Path:
    """Write the wire representation of *snapshot* as indented JSON."""
    target = Path(path)
    target.write_text(json.dumps(snapshot.to_wire(), indent=2, ensure_ascii=False), encoding="utf-8")
    return target


def export_text(
    snapshot: SharedStateSnapshot,
    path: Path | str = "global_variables.txt",
    *,
    generated_at: datetime | None = None,
) -> Path:
    target = Path(path)
    target.write_text(snapshot_to_text(snapshot, generated_at=generated_at), encoding="utf-8")
    return target
