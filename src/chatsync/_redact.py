"""Helpers for safe debug logging.

Bodies exchanged with the chat backend are mostly user speech: channel
texts, transcript utterances and cap-check messages. Local settings add
the text-to-speech API key. Debug logs keep the shape of a payload but
mask secrets and clip speech to a short preview.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SECRET_KEYS: frozenset[str] = frozenset(
    {
        "apikey",
        "api_key",
        "elevenlabs_api_key",
        "authorization",
        "cookie",
        "password",
        "token",
    }
)

# Keys whose values are user speech or model prose.
_UTTERANCE_KEYS: frozenset[str] = frozenset(
    {
        "persononeinput",
        "persontwoinput",
        "chatexplanation",
        "text",
        "message",
    }
)

_MAX_DEPTH = 20


def _clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}…<+{len(text) - limit} chars>"


def _redact_entry(key: str, value: Any, *, max_string: int, max_utterance: int, depth: int) -> Any:
    lowered = key.lower()
    if lowered in _SECRET_KEYS:
        return "<redacted>" if value else value
    if lowered in _UTTERANCE_KEYS and isinstance(value, str):
        return _clip(value, max_utterance)
    return redact_for_log(value, max_string=max_string, max_utterance=max_utterance, _depth=depth + 1)


def redact_for_log(value: Any, *, max_string: int = 200, max_utterance: int = 60, _depth: int = 0) -> Any:
    """Return a copy of *value* safe to emit in debug logs.

    Secret values become ``"<redacted>"``; utterance fields are clipped to
    *max_utterance* characters and any other string to *max_string*.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _clip(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return {
            str(key): _redact_entry(str(key), item, max_string=max_string, max_utterance=max_utterance, depth=_depth)
            for key, item in value.items()
        }
    if isinstance(value, Sequence):
        return [
            redact_for_log(item, max_string=max_string, max_utterance=max_utterance, _depth=_depth + 1)
            for item in value
        ]
    return repr(value)
