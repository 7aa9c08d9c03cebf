"""Deterministic acceptance policies.

This module intentionally contains *no* I/O and no store access; it only
decides whether an incoming value should be applied.
"""

from __future__ import annotations


def should_accept_transcript(new_text: str, last_text: str) -> bool:
    """Decide whether *new_text* supersedes the last text forwarded for a channel.

    Policy:
    - Blank text is never accepted.
    - The first non-blank text for a channel is always accepted.
    - An exact repeat (the feed re-reporting the same utterance) is rejected.
    - A growing partial of the same utterance is accepted only if the
      appended part contains something other than whitespace.
    - Anything else is a new utterance and is accepted.
    """
    if not new_text.strip():
        return False
    if not last_text:
        return True
    if new_text == last_text:
        return False
    if len(new_text) > len(last_text) and new_text.startswith(last_text):
        return bool(new_text[len(last_text) :].strip())
    return True


def is_stale_remote(basis: int | None, edit_seq: int) -> bool:
    """Whether a remote snapshot predates the latest local edit.

    *basis* is the highest settled local edit at the time the fetch was
    issued. ``None`` disables the check.
    """
    if basis is None:
        return False
    return basis < edit_seq
