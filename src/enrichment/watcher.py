"""Mutation watcher.

Receives batches of document mutation records from an external source
(browser bridge, live-reload hook, test driver) and triggers a rescan
once insertions have stopped for a quiet period.
"""

import asyncio
from collections.abc import AsyncIterable, Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from src.enrichment.utils.logger import setup_logger

logger = setup_logger("enrichment.watcher")

DEFAULT_DEBOUNCE_SECONDS = 0.5


@dataclass(frozen=True)
class MutationRecord:
    """One subtree change under the document body."""

    added_nodes: tuple[Any, ...] = ()
    removed_nodes: tuple[Any, ...] = ()


class MutationWatcher:
    """Trailing-edge debounced rescan trigger.

    Every batch with at least one inserted node restarts the timer; the
    rescan runs once no such batch arrived for ``delay`` seconds. A
    single timer slot holds the pending rescan.
    """

    def __init__(
        self,
        on_change: Callable[[], Awaitable[Any]],
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        """Initialize watcher.

        Args:
            on_change: Coroutine function running the full pipeline.
            delay: Quiet period in seconds.
        """
        self._on_change = on_change
        self.delay = delay
        self._timer: asyncio.TimerHandle | None = None
        self._running: set[asyncio.Task[Any]] = set()
        self._connected = True

    @property
    def pending(self) -> bool:
        """A rescan is scheduled and has not fired yet."""
        return self._timer is not None

    def notify(self, records: Iterable[MutationRecord]) -> bool:
        """Feed one batch of mutation records.

        Args:
            records: Records observed together.

        Returns:
            True when the batch (re)scheduled a rescan.
        """
        if not self._connected:
            return False
        if not any(record.added_nodes for record in records):
            return False

        self._schedule()
        return True

    async def watch(self, source: AsyncIterable[Iterable[MutationRecord]]) -> None:
        """Consume mutation batches until the source ends or we disconnect."""
        async for batch in source:
            if not self._connected:
                break
            self.notify(batch)

    def disconnect(self) -> None:
        """Stop observing, drop the pending rescan and abandon running ones."""
        self._connected = False
        self._cancel_timer()
        for task in list(self._running):
            task.cancel()

    async def wait_idle(self) -> None:
        """Wait for rescans that already fired to complete."""
        if self._running:
            await asyncio.gather(*self._running, return_exceptions=True)

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def _schedule(self) -> None:
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.delay, self._fire)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        task = asyncio.ensure_future(self._on_change())
        self._running.add(task)
        task.add_done_callback(self._on_rescan_done)

    def _on_rescan_done(self, task: asyncio.Task[Any]) -> None:
        self._running.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Rescan failed: {error!r}")
