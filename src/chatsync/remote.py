"""Remote endpoints of the chat backend.

:class:`RemoteSyncClient` is the error boundary of the library: transport
and parse failures are logged here and turned into ``None``/``False``
results, so nothing network-related propagates to the store or the
schedulers.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any, Final

from pydantic import ValidationError

from chatsync._constants import (
    AI_VERIFICATION_ENDPOINT,
    CAP_CHECK_ENDPOINT,
    END_TRANSCRIBE_ENDPOINT,
    FACT_CHECK_ENDPOINT,
    GLOBALS_ENDPOINT,
    HEALTH_ENDPOINT,
    START_TRANSCRIBE_ENDPOINT,
    TRANSCRIBE_ENDPOINT,
)
from chatsync._transport import Transport
from chatsync.exceptions import ChatSyncError, ChatSyncParseError
from chatsync.models.responses import HealthStatus, TranscriptEntry, VerificationStatus
from chatsync.models.snapshot import Channel, SharedStateSnapshot

_logger = logging.getLogger(__name__)

_FAILED: Final = object()


class RemoteSyncClient:
    """Never-raising access to the shared-state and transcript endpoints."""

    def __init__(
        self,
        transport: Transport,
        *,
        globals_endpoint: str = GLOBALS_ENDPOINT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._transport = transport
        self._globals_endpoint = globals_endpoint
        self._clock = clock

    async def _request(self, method: str, endpoint: str, action: str, *, json_body: Any = None) -> Any:
        """Return the decoded body, or ``_FAILED`` after logging the failure."""
        try:
            return await self._transport.request_json(method, endpoint, json_body=json_body)
        except ChatSyncError as exc:
            _logger.warning("Failed to %s: %s", action, exc)
            return _FAILED

    # ------------------------------------------------------------------
    # Shared state
    # ------------------------------------------------------------------

    async def fetch_snapshot(self) -> SharedStateSnapshot | None:
        """Fetch the remote snapshot; ``None`` on any failure."""
        body = await self._request("GET", self._globals_endpoint, "fetch shared state")
        if body is _FAILED:
            return None
        try:
            return SharedStateSnapshot.from_wire(body, endpoint=self._globals_endpoint)
        except ChatSyncParseError as exc:
            _logger.warning("Failed to fetch shared state: %s", exc)
            return None

    async def save_snapshot(self, snapshot: SharedStateSnapshot) -> bool:
        """Save the full snapshot; ``True`` only on a 2xx JSON response."""
        body = await self._request(
            "PUT",
            self._globals_endpoint,
            "save shared state",
            json_body=snapshot.to_wire(),
        )
        return body is not _FAILED

    async def health_check(self) -> HealthStatus:
        """Probe connectivity and measure round-trip latency."""
        started = self._clock()
        try:
            body = await self._transport.request_json("GET", HEALTH_ENDPOINT)
        except ChatSyncError as exc:
            return HealthStatus(
                connected=False,
                latency_ms=(self._clock() - started) * 1000.0,
                error=str(exc) or "Unknown connection error",
            )
        latency_ms = (self._clock() - started) * 1000.0

        if not isinstance(body, Mapping):
            return HealthStatus(connected=False, latency_ms=latency_ms, error="Health check failed")

        status_ok = body.get("status") == "ok"
        connected = status_ok or body.get("success") is True
        error = None if status_ok else str(body.get("message") or "Health check failed")
        return HealthStatus(connected=connected, latency_ms=latency_ms, error=error)

    # ------------------------------------------------------------------
    # Auxiliary endpoints
    # ------------------------------------------------------------------

    async def fetch_verification_status(self) -> VerificationStatus | None:
        body = await self._request("GET", AI_VERIFICATION_ENDPOINT, "fetch AI verification status")
        if body is _FAILED:
            return None
        try:
            return VerificationStatus.model_validate(body)
        except ValidationError as exc:
            _logger.warning("Failed to fetch AI verification status: %s", exc)
            return None

    async def send_cap_check(self, message: str, channel: Channel) -> bool:
        """Forward the last user utterance for a cap check."""
        body = await self._request(
            "POST",
            CAP_CHECK_ENDPOINT,
            "send message for cap check",
            json_body={"message": message, "sender": channel.sender},
        )
        if body is _FAILED or not isinstance(body, Mapping):
            return False
        return bool(body.get("success"))

    async def trigger_fact_check(self) -> Any | None:
        """Trigger a fact check; the response body is returned as-is."""
        body = await self._request("GET", FACT_CHECK_ENDPOINT, "trigger fact check")
        if body is _FAILED:
            return None
        return body

    # ------------------------------------------------------------------
    # Dictation
    # ------------------------------------------------------------------

    async def start_transcription(self) -> bool:
        body = await self._request("GET", START_TRANSCRIBE_ENDPOINT, "start transcription")
        if body is _FAILED:
            return False
        _logger.info("Transcription started")
        return True

    async def end_transcription(self) -> bool:
        body = await self._request("GET", END_TRANSCRIBE_ENDPOINT, "end transcription")
        if body is _FAILED:
            return False
        _logger.info("Transcription stopped")
        return True

    async def _fetch_transcript_items(self) -> list[Any] | None:
        body = await self._request("GET", TRANSCRIBE_ENDPOINT, "fetch transcript")
        if body is _FAILED:
            return None
        if not isinstance(body, list):
            _logger.warning("Failed to fetch transcript: body is %s, not a list", type(body).__name__)
            return None
        return body

    async def fetch_transcript(self) -> list[TranscriptEntry] | None:
        """Fetch the transcript so far; malformed entries are skipped."""
        items = await self._fetch_transcript_items()
        if items is None:
            return None

        entries: list[TranscriptEntry] = []
        for item in items:
            try:
                entries.append(TranscriptEntry.model_validate(item))
            except ValidationError:
                _logger.debug("Skipping malformed transcript entry %r", item)
        return entries

    async def fetch_latest_transcript_entry(self) -> TranscriptEntry | None:
        """Return the newest transcript entry.

        ``None`` when the transcript is empty, cannot be fetched, or its
        newest entry is malformed. Older entries are never substituted.
        """
        items = await self._fetch_transcript_items()
        if not items:
            return None
        try:
            return TranscriptEntry.model_validate(items[-1])
        except ValidationError:
            _logger.debug("Ignoring malformed latest transcript entry %r", items[-1])
            return None
