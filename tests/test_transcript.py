from __future__ import annotations

import pytest

from chatsync.models.snapshot import Channel, SharedStateSnapshot
from chatsync.state.store import SharedStateStore
from chatsync.transcript import TranscriptReconciler, channel_from_speaker


def _reconciler() -> tuple[TranscriptReconciler, SharedStateStore]:
    store = SharedStateStore(initial=SharedStateSnapshot(explanation="X"))
    return TranscriptReconciler(store), store


def test_first_observation_is_forwarded() -> None:
    reconciler, store = _reconciler()

    assert reconciler.consider(Channel.A, "hello") is True
    assert store.get().channel_a_text == "hello"
    assert reconciler.last_accepted(Channel.A) == "hello"


def test_dedup_sequence() -> None:
    reconciler, store = _reconciler()
    reconciler.consider(Channel.A, "hello")

    assert reconciler.consider(Channel.A, "hello") is False
    assert reconciler.consider(Channel.A, "hello world") is True
    assert reconciler.last_accepted(Channel.A) == "hello world"
    assert reconciler.consider(Channel.A, "hello world ") is False
    assert reconciler.consider(Channel.A, "goodbye") is True

    assert store.get().channel_a_text == "goodbye"
    assert store.edit_seq == 3


def test_whitespace_growth_is_not_forwarded() -> None:
    reconciler, store = _reconciler()
    reconciler.consider(Channel.B, "hello")

    assert reconciler.consider(Channel.B, "hello ") is False
    assert reconciler.last_accepted(Channel.B) == "hello"
    assert store.edit_seq == 1


def test_blank_text_is_rejected_even_for_fresh_channel() -> None:
    reconciler, store = _reconciler()

    assert reconciler.consider(Channel.A, "   ") is False
    assert reconciler.last_accepted(Channel.A) == ""
    assert store.edit_seq == 0


def test_channels_are_independent() -> None:
    reconciler, store = _reconciler()
    reconciler.consider(Channel.A, "same words")

    assert reconciler.consider(Channel.B, "same words") is True
    assert reconciler.last_accepted(Channel.A) == "same words"
    assert store.get().channel_a_text == "same words"
    assert store.get().channel_b_text == "same words"


def test_channel_accepts_plain_strings() -> None:
    reconciler, store = _reconciler()

    assert reconciler.consider("B", "hi") is True
    assert store.get().channel_b_text == "hi"
    with pytest.raises(ValueError):
        reconciler.consider("C", "hi")


def test_reset_forgets_accepted_text() -> None:
    reconciler, _store = _reconciler()
    reconciler.consider(Channel.A, "hello")

    reconciler.reset()

    assert reconciler.last_accepted(Channel.A) == ""
    assert reconciler.consider(Channel.A, "hello") is True


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Speaker A", Channel.A),
        ("spk_B", Channel.B),
        ("Speaker B ", Channel.B),
        ("Speaker C", None),
        ("speaker a", None),
        ("", None),
    ],
)
def test_channel_from_speaker(label: str, expected: Channel | None) -> None:
    assert channel_from_speaker(label) is expected
