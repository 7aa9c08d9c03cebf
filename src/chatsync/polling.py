"""Fixed-interval polling on the running asyncio loop."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

_logger = logging.getLogger(__name__)

#: A plain function or a coroutine function taking no arguments.
TickCallback = Callable[[], Any]


class PollingScheduler:
    """Runs a single repeating timer that invokes a tick callback.

    The callback may be a plain function or a coroutine function. It is
    invoked once immediately on :meth:`start` and then every *interval*
    seconds. While a coroutine tick is still running, later ticks are
    skipped rather than overlapped.

    Usage::

        scheduler = PollingScheduler("state")
        scheduler.start(store.refresh, 2.0)
        ...
        scheduler.stop()
    """

    def __init__(self, name: str = "poll") -> None:
        self._name = name
        self._timer: asyncio.Task[None] | None = None
        self._inflight: asyncio.Future[Any] | None = None
        self._interval: float | None = None
        self.tick_count = 0
        self.skipped_ticks = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_active(self) -> bool:
        """Whether a timer is currently scheduled."""
        return self._timer is not None and not self._timer.done()

    @property
    def interval(self) -> float | None:
        return self._interval

    def start(self, on_tick: TickCallback, interval: float) -> None:
        """Start polling; a no-op (with a warning) when already running.

        When a tick from a previous run is still in flight, the priming
        call runs as soon as that tick finishes instead of being skipped.
        """
        if self.is_active:
            _logger.warning("%s polling is already active", self._name)
            return
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        loop = asyncio.get_running_loop()
        self._interval = interval
        self._timer = loop.create_task(self._run(on_tick, interval), name=f"chatsync-{self._name}-poll")
        _logger.info("Started %s polling every %ss", self._name, interval)
        # Prime immediately so state is not stale for a whole interval.
        inflight = self._inflight
        if inflight is not None and not inflight.done():
            timer = self._timer
            inflight.add_done_callback(lambda _future: self._prime_after_stale_tick(timer, on_tick))
        else:
            self._dispatch(on_tick)

    def stop(self) -> None:
        """Cancel the timer. An in-flight tick is left to complete."""
        timer = self._timer
        self._timer = None
        if timer is None:
            return
        timer.cancel()
        _logger.info("Stopped %s polling", self._name)

    async def drain(self) -> None:
        """Wait for the in-flight tick, if any, to finish."""
        inflight = self._inflight
        if inflight is None or inflight.done():
            return
        await asyncio.wait([inflight])

    async def _run(self, on_tick: TickCallback, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self._dispatch(on_tick)

    def _prime_after_stale_tick(self, timer: asyncio.Task[None] | None, on_tick: TickCallback) -> None:
        # The run that was started may already have been stopped or replaced.
        if timer is None or self._timer is not timer or timer.done():
            return
        self._dispatch(on_tick)

    def _dispatch(self, on_tick: TickCallback) -> None:
        if self._inflight is not None and not self._inflight.done():
            self.skipped_ticks += 1
            _logger.debug("Skipping %s tick; previous tick still in flight", self._name)
            return

        self.tick_count += 1
        try:
            result = on_tick()
        except Exception:
            _logger.warning("%s tick failed", self._name, exc_info=True)
            return

        if inspect.isawaitable(result):
            future = asyncio.ensure_future(result)
            future.add_done_callback(self._on_tick_done)
            self._inflight = future

    def _on_tick_done(self, future: asyncio.Future[Any]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            _logger.warning("%s tick failed", self._name, exc_info=exc)
