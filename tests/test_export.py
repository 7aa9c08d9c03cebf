from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

from chatsync.export import export_json, export_text, snapshot_to_text
from chatsync.models.snapshot import SharedStateSnapshot


def _snapshot() -> SharedStateSnapshot:
    return SharedStateSnapshot(
        channel_a_text="the earth is flat",
        channel_b_text="no it isn't",
        verification=False,
        explanation="Satellite imagery disagrees.",
    )


def test_export_json_writes_wire_keys(tmp_path: Path) -> None:
    target = export_json(_snapshot(), tmp_path / "globals.json")

    assert json.loads(target.read_text(encoding="utf-8")) == {
        "personOneInput": "the earth is flat",
        "personTwoInput": "no it isn't",
        "truthVerification": False,
        "chatExplanation": "Satellite imagery disagrees.",
    }


def test_snapshot_to_text_layout() -> None:
    text = snapshot_to_text(_snapshot(), generated_at=datetime(2026, 1, 1, tzinfo=UTC))

    assert text.splitlines() == [
        "Global Variables Export",
        "Generated: 2026-01-01T00:00:00+00:00",
        "",
        "Person One Input: the earth is flat",
        "Person Two Input: no it isn't",
        "Truth Verification: false",
        "Chat Explanation: Satellite imagery disagrees.",
    ]


def test_undecided_verification_renders_null(tmp_path: Path) -> None:
    target = export_text(SharedStateSnapshot(), tmp_path / "globals.txt")
    assert "Truth Verification: null" in target.read_text(encoding="utf-8")
