"""High-level async client tying the sync components together."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from chatsync._transport import HttpTransport
from chatsync.config import ChatSyncConfig
from chatsync.exceptions import ChatSyncError
from chatsync.models.responses import HealthStatus, VerificationStatus
from chatsync.models.snapshot import SharedStateSnapshot
from chatsync.polling import PollingScheduler
from chatsync.remote import RemoteSyncClient
from chatsync.state.events import StateListener
from chatsync.state.store import SharedStateStore
from chatsync.transcript import TranscriptReconciler, channel_from_speaker

_logger = logging.getLogger(__name__)


class ChatSyncClient:
    """Async client for the chat backend's shared state and dictation feed.

    Usage::

        async with ChatSyncClient(config, on_state_change=print) as client:
            await client.load()
            await client.start_dictation()
            ...

    On exit both polling loops stop, pending saves are awaited and an owned
    HTTP session is closed.
    """

    def __init__(
        self,
        config: ChatSyncConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        on_state_change: StateListener | None = None,
    ) -> None:
        self._config = config or ChatSyncConfig()
        self._external_session = session is not None
        self._http_session = session
        self._remote: RemoteSyncClient | None = None
        self._store: SharedStateStore | None = None
        self._reconciler: TranscriptReconciler | None = None
        self._state_poller = PollingScheduler("state")
        self._transcript_poller = PollingScheduler("transcript")
        self._on_state_change = on_state_change

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ChatSyncClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        transport = HttpTransport(self._config, self._http_session)
        self._remote = RemoteSyncClient(transport, globals_endpoint=self._config.globals_endpoint)
        self._store = SharedStateStore.create(self._remote, config=self._config)
        self._reconciler = TranscriptReconciler(self._store)
        if self._on_state_change is not None:
            self._store.subscribe(self._on_state_change)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self._transcript_poller.stop()
        self._state_poller.stop()
        await self._transcript_poller.drain()
        await self._state_poller.drain()
        if self._store is not None:
            await self._store.dispose()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._remote = None
        self._reconciler = None

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    @property
    def config(self) -> ChatSyncConfig:
        return self._config

    @property
    def remote(self) -> RemoteSyncClient:
        if self._remote is None:
            raise ChatSyncError("Client not initialized. Use 'async with ChatSyncClient(...) as client:'")
        return self._remote

    @property
    def store(self) -> SharedStateStore:
        if self._store is None:
            raise ChatSyncError("Client not initialized. Use 'async with ChatSyncClient(...) as client:'")
        return self._store

    @property
    def reconciler(self) -> TranscriptReconciler:
        if self._reconciler is None:
            raise ChatSyncError("Client not initialized. Use 'async with ChatSyncClient(...) as client:'")
        return self._reconciler

    @property
    def state_poller(self) -> PollingScheduler:
        return self._state_poller

    @property
    def transcript_poller(self) -> PollingScheduler:
        return self._transcript_poller

    def snapshot(self) -> SharedStateSnapshot:
        return self.store.get()

    # ------------------------------------------------------------------
    # Shared state
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Fetch the remote state once, then start polling for changes."""
        changed = await self.store.refresh()
        self.start_polling()
        return changed

    def start_polling(self, interval: float | None = None) -> None:
        self._state_poller.start(self.store.refresh, interval or self._config.poll_interval)

    def stop_polling(self) -> None:
        self._state_poller.stop()

    async def check_connection(self) -> HealthStatus:
        status = await self.remote.health_check()
        if not status.connected:
            _logger.warning("Connection to %s failed: %s", self._config.base_url, status.error)
        return status

    async def verification_status(self) -> VerificationStatus | None:
        return await self.remote.fetch_verification_status()

    async def send_last_message(self) -> bool:
        return await self.store.send_last_message()

    async def fact_check(self) -> Any | None:
        return await self.remote.trigger_fact_check()

    # ------------------------------------------------------------------
    # Dictation
    # ------------------------------------------------------------------

    async def start_dictation(self, interval: float | None = None) -> bool:
        """Start a dictation session and poll its transcript.

        Polling only starts when the backend confirmed the session.
        """
        self.reconciler.reset()
        if not await self.remote.start_transcription():
            return False
        self._transcript_poller.start(self._poll_transcript, interval or self._config.transcript_interval)
        return True

    async def stop_dictation(self) -> bool:
        """End the dictation session; polling stops once the backend confirms."""
        if not await self.remote.end_transcription():
            return False
        self._transcript_poller.stop()
        return True

    async def _poll_transcript(self) -> None:
        latest = await self.remote.fetch_latest_transcript_entry()
        if latest is None:
            return
        channel = channel_from_speaker(latest.speaker)
        if channel is None:
            _logger.debug("Ignoring transcript entry from unrecognised speaker %r", latest.speaker)
            return
        self.reconciler.consider(channel, latest.text.strip())
