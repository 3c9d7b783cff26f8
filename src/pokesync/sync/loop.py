"""Polling sync loop.

Pulls the server snapshot on a fixed-interval timer, reconciles it into the
held snapshot and forwards the resulting ops to a view. Cycles never
overlap: a tick that fires while a cycle is still in flight is skipped.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Protocol

from pokesync._constants import DEFAULT_POLL_INTERVAL, UPDATE_FAILED_MESSAGE
from pokesync.exceptions import PokeSyncApiError, PokeSyncError
from pokesync.models.entity import Entity
from pokesync.sync.reconcile import Snapshot, SyncOp, reconcile
from pokesync.sync.view import SyncView, apply_ops

_logger = logging.getLogger(__name__)


class EntitySource(Protocol):
    """What the loop needs from a client (see :class:`pokesync.client.PokeSyncClient`)."""

    async def get_entities(self) -> list[Entity]: ...

    async def change_power(self, entity_id: int, change: int) -> Entity: ...


def _log_notification(message: str) -> None:
    _logger.warning("Notification: %s", message)


class SyncLoop:
    """Owns one held snapshot and keeps it in line with the server.

    Parameters
    ----------
    source : EntitySource
        Client used to fetch snapshots and post power changes.
    view : SyncView
        Receives one callback per reconciliation op.
    interval : float
        Seconds between two scheduled ticks.
    clock, sleep
        Injectable monotonic clock and sleep, for deterministic tests.
    notify : callable
        Blocking user notification (e.g. an alert dialog). Defaults to a
        WARNING log line.
    """

    def __init__(
        self,
        source: EntitySource,
        view: SyncView,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        notify: Callable[[str], None] = _log_notification,
        on_cycle: Callable[[list[SyncOp]], None] | None = None,
    ) -> None:
        self._source = source
        self._view = view
        self._interval = interval
        self._clock = clock
        self._sleep = sleep
        self._notify = notify
        self._on_cycle = on_cycle
        self._snapshot = Snapshot()
        self._in_flight = False
        self._tasks: set[asyncio.Task[list[SyncOp] | None]] = set()
        self.skipped_ticks = 0

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    # ------------------------------------------------------------------
    # Cycles
    # ------------------------------------------------------------------

    async def poll_once(self) -> list[SyncOp] | None:
        """Run one fetch → reconcile → apply cycle.

        Returns the applied ops, or ``None`` when the cycle was skipped or
        failed. A failed fetch never touches the held snapshot; a failing view
        clears it so the next cycle bootstraps the view again.
        """
        if self._in_flight:
            self.skipped_ticks += 1
            _logger.debug("Poll skipped: previous cycle still in flight")
            return None

        self._in_flight = True
        try:
            try:
                fresh = await self._source.get_entities()
                ops = reconcile(self._snapshot, fresh)
            except PokeSyncError as exc:
                _logger.warning("Error fetching Pokémon data: %s", exc)
                return None

            try:
                applied = apply_ops(self._view, ops)
                if self._on_cycle is not None:
                    self._on_cycle(ops)
            except Exception:
                _logger.exception("View update failed; resetting held snapshot")
                self._snapshot.replace_all(())
                return None
            if applied:
                _logger.info("Applied %d change(s); holding %d entities", applied, len(self._snapshot))
            return ops
        finally:
            self._in_flight = False

    async def run(self, *, max_ticks: int | None = None) -> None:
        """Tick every ``interval`` seconds until cancelled (or *max_ticks* ticks).

        Ticks are scheduled against the clock, not chained to cycle
        completion, so a slow cycle makes the following tick skip.
        """
        next_tick = self._clock()
        ticks = 0
        try:
            while True:
                if self._in_flight:
                    self.skipped_ticks += 1
                    _logger.debug("Tick %d skipped: previous cycle still in flight", ticks)
                else:
                    task = asyncio.create_task(self.poll_once())
                    self._tasks.add(task)
                    task.add_done_callback(self._on_task_done)
                ticks += 1
                if max_ticks is not None and ticks >= max_ticks:
                    break
                next_tick += self._interval
                await self._sleep(max(0.0, next_tick - self._clock()))
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)
        finally:
            for task in list(self._tasks):
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task

    def _on_task_done(self, task: asyncio.Task[list[SyncOp] | None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Poll cycle crashed", exc_info=exc)

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    async def change_power(self, entity_id: int, change: int) -> Entity | None:
        """Post a power change and reflect the server's answer immediately.

        Server-side refusals (unknown id, ``success: false``) are reported
        through ``notify`` with the server's message and leave all state as is.
        """
        try:
            entity = await self._source.change_power(entity_id, change)
        except PokeSyncApiError as exc:
            self._notify(str(exc))
            return None
        except PokeSyncError as exc:
            _logger.warning("Error updating power level: %s", exc)
            self._notify(UPDATE_FAILED_MESSAGE)
            return None

        self._view.on_update(entity)
        self._snapshot.merge_record(entity)
        return entity
