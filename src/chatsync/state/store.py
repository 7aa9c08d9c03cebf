"""In-memory shared-state store.

This is the only component allowed to replace the shared snapshot.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from chatsync.exceptions import ChatSyncError, UnknownFieldError
from chatsync.models.responses import LastUserMessage
from chatsync.models.snapshot import Channel, SharedStateSnapshot, SnapshotField
from chatsync.state.events import ChangeSource, StateChange, StateListener
from chatsync.state.policy import is_stale_remote

if TYPE_CHECKING:
    from chatsync.config import ChatSyncConfig
    from chatsync.remote import RemoteSyncClient

_logger = logging.getLogger(__name__)

_CHANNEL_BY_FIELD: dict[SnapshotField, Channel] = {channel.field: channel for channel in Channel}


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SharedStateStore:
    """Holds the authoritative client-side snapshot.

    Local edits are applied synchronously (optimistic write) and saved in
    the background without awaiting confirmation. Remote snapshots are
    applied only when they differ structurally from the current one, and
    only remote changes are announced to subscribers.

    Every local edit bumps :attr:`edit_seq`; once its save call completes
    (successfully or not) the edit is *settled*. Passing the settled
    sequence captured when a fetch was issued as ``basis`` to
    :meth:`reconcile_remote` drops poll results that may predate a local
    edit.
    """

    def __init__(
        self,
        remote: RemoteSyncClient | None = None,
        *,
        initial: SharedStateSnapshot | None = None,
        strict: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._remote = remote
        self._snapshot = initial if initial is not None else SharedStateSnapshot()
        self._strict = strict
        self._clock = clock
        self._listeners: list[StateListener] = []
        self._save_tasks: set[asyncio.Task[bool]] = set()
        self._edit_seq = 0
        self._settled_seq = 0
        self._last_user_message: LastUserMessage | None = None
        self._disposed = False

    @classmethod
    def create(
        cls,
        remote: RemoteSyncClient | None,
        *,
        config: ChatSyncConfig | None = None,
        initial: SharedStateSnapshot | None = None,
    ) -> SharedStateStore:
        """Create a store using the field policy from *config*."""
        strict = config.strict_fields if config is not None else False
        return cls(remote, initial=initial, strict=strict)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self) -> SharedStateSnapshot:
        """Return the current snapshot (immutable)."""
        return self._snapshot

    @property
    def edit_seq(self) -> int:
        return self._edit_seq

    @property
    def settled_seq(self) -> int:
        return self._settled_seq

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def pending_saves(self) -> int:
        return len(self._save_tasks)

    @property
    def last_user_message(self) -> LastUserMessage | None:
        return self._last_user_message

    # ------------------------------------------------------------------
    # Local edits
    # ------------------------------------------------------------------

    def set_field(self, name: str | SnapshotField, value: Any) -> None:
        """Apply a local edit and schedule a background save.

        Unknown field names are ignored with a warning, or raise
        :class:`UnknownFieldError` when the store is strict. Values of the
        wrong type raise :class:`pydantic.ValidationError`.
        """
        self._require_open()
        field = SnapshotField.resolve(name)
        if field is None:
            if self._strict:
                raise UnknownFieldError(str(name))
            _logger.warning("Ignoring update to unknown snapshot field %r", name)
            return
        self._apply_local({field: value})

    def set_channel_text(self, channel: Channel, text: str) -> None:
        self.set_field(channel.field, text)

    def clear_inputs(self) -> None:
        """Empty both channel texts and reset verification in a single edit."""
        self._require_open()
        self._apply_local(
            {
                SnapshotField.CHANNEL_A_TEXT: "",
                SnapshotField.CHANNEL_B_TEXT: "",
                SnapshotField.VERIFICATION: None,
            }
        )

    def set_last_user_message(self, text: str, channel: Channel) -> None:
        """Record *text* as the last user message if it is not blank."""
        stripped = text.strip()
        if stripped:
            self._last_user_message = LastUserMessage(text=stripped, channel=channel)

    def _apply_local(self, updates: Mapping[SnapshotField, Any]) -> None:
        data = self._snapshot.model_dump()
        data.update({field.value: value for field, value in updates.items()})
        self._snapshot = SharedStateSnapshot.model_validate(data)

        for field, value in updates.items():
            channel = _CHANNEL_BY_FIELD.get(field)
            if channel is not None and isinstance(value, str):
                self.set_last_user_message(value, channel)

        self._edit_seq += 1
        _logger.debug("Local edit %d: %s", self._edit_seq, sorted(updates))
        self._schedule_save(self._edit_seq)

    def _schedule_save(self, seq: int) -> None:
        if self._remote is None:
            self._settled_seq = seq
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            _logger.warning("No running event loop; local edit %d will not be saved", seq)
            self._settled_seq = seq
            return
        task = loop.create_task(self._save_edit(self._snapshot, seq))
        self._save_tasks.add(task)
        task.add_done_callback(self._save_tasks.discard)

    async def _save_edit(self, snapshot: SharedStateSnapshot, seq: int) -> bool:
        assert self._remote is not None  # noqa: S101
        try:
            ok = await self._remote.save_snapshot(snapshot)
        finally:
            self._settled_seq = max(self._settled_seq, seq)
        if not ok:
            _logger.warning("Saving local edit %d failed; keeping local state", seq)
        return ok

    # ------------------------------------------------------------------
    # Remote reconciliation
    # ------------------------------------------------------------------

    def reconcile_remote(self, candidate: SharedStateSnapshot | None, *, basis: int | None = None) -> bool:
        """Apply a remote snapshot if it differs from the current one.

        Returns ``True`` when the snapshot was replaced (and subscribers
        were notified).
        """
        if candidate is None:
            return False
        if is_stale_remote(basis, self._edit_seq):
            _logger.debug(
                "Dropping remote snapshot fetched at settled edit %s; local edit %d is newer",
                basis,
                self._edit_seq,
            )
            return False

        changed = self._snapshot.changed_fields(candidate)
        if not changed:
            return False

        previous = self._snapshot
        self._snapshot = candidate
        _logger.info("Shared state updated from remote: %s", ", ".join(sorted(changed)))
        self._notify(
            StateChange(
                previous=previous,
                current=candidate,
                changed_fields=changed,
                source=ChangeSource.REMOTE,
                observed_at=self._clock(),
            )
        )
        return True

    async def refresh(self) -> bool:
        """Fetch the remote snapshot now and reconcile it."""
        if self._remote is None:
            return False
        basis = self._settled_seq
        candidate = await self._remote.fetch_snapshot()
        return self.reconcile_remote(candidate, basis=basis)

    async def save(self) -> bool:
        """Save the current snapshot and wait for the result."""
        if self._remote is None:
            return False
        return await self._remote.save_snapshot(self._snapshot)

    async def send_last_message(self) -> bool:
        """Forward the last user message to the cap-check endpoint."""
        message = self._last_user_message
        if message is None or self._remote is None:
            return False
        return await self._remote.send_cap_check(message.text, message.channel)

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener* for remote changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, change: StateChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                _logger.exception("State listener %r failed", listener)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def flush(self) -> None:
        """Wait for all in-flight background saves."""
        while self._save_tasks:
            await asyncio.gather(*list(self._save_tasks))

    async def dispose(self) -> None:
        """Wait for pending saves and drop subscribers; further edits are rejected."""
        self._disposed = True
        await self.flush()
        self._listeners.clear()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _require_open(self) -> None:
        if self._disposed:
            raise ChatSyncError("Store has been disposed")
