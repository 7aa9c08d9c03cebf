"""Transcript reconciliation.

A live dictation engine reports the same utterance over and over while it
grows. :class:`TranscriptReconciler` forwards only the updates that carry
something new, per channel, to the shared-state store.
"""

from __future__ import annotations

import logging

from chatsync.models.snapshot import Channel
from chatsync.state.policy import should_accept_transcript
from chatsync.state.store import SharedStateStore

_logger = logging.getLogger(__name__)


def channel_from_speaker(label: str) -> Channel | None:
    """Map a dictation speaker label (``"Speaker A"``) to a channel.

    The feed identifies speakers only by the last character of the label.
    """
    suffix = label.strip()[-1:]
    try:
        return Channel(suffix)
    except ValueError:
        return None


class TranscriptReconciler:
    """Decides per channel whether incoming text supersedes the last accepted text."""

    def __init__(self, store: SharedStateStore) -> None:
        self._store = store
        self._last_accepted: dict[Channel, str] = {}

    def last_accepted(self, channel: Channel | str) -> str:
        return self._last_accepted.get(Channel(channel), "")

    def consider(self, channel: Channel | str, new_text: str) -> bool:
        """Forward *new_text* to the store if it is a meaningful update.

        Returns ``True`` when the text was accepted.
        """
        channel = Channel(channel)
        last_text = self._last_accepted.get(channel, "")
        if not should_accept_transcript(new_text, last_text):
            _logger.debug("Rejected channel %s text %r (last %r)", channel, new_text, last_text)
            return False

        self._store.set_channel_text(channel, new_text)
        self._last_accepted[channel] = new_text
        _logger.debug("Accepted channel %s text %r", channel, new_text)
        return True

    def reset(self) -> None:
        """Forget accepted text for all channels (new dictation session)."""
        self._last_accepted.clear()
