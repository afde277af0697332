"""Autosave scheduling."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from .broadcaster import StateSyncBroadcaster
from .host import SAVE_ALL_COMMAND_ID, DispatchError, Host
from .state import FireResult, SchedulerState, monotonic_millis
from .tasks import DeferredTask, TaskFactory

logger = logging.getLogger(__name__)


class AutosaveScheduler:
    """
    Owns the single recurring autosave task for one SchedulerState.

    While ``state.enabled`` is true exactly one task is active; while it is
    false there is none. Each firing posts the host's Save All command and
    reschedules from the firing instant (fixed delay).
    """

    def __init__(
        self,
        state: SchedulerState,
        host: Host,
        broadcaster: StateSyncBroadcaster,
        task_factory: TaskFactory,
        clock: Callable[[], int] = monotonic_millis,
        local_now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.state = state
        self.host = host
        self.broadcaster = broadcaster
        self._task_factory = task_factory
        self._clock = clock
        self._local_now = local_now
        self._task: Optional[DeferredTask] = None

        if self.state.enabled:
            self._start_task()
        else:
            self.state.next_deadline_ms = None

    @property
    def has_active_task(self) -> bool:
        return self._task is not None and self._task.active

    # ------------------------------------------------------------ operations ---
    def set_enabled(self, flag: bool) -> None:
        flag = bool(flag)
        if flag == self.state.enabled:
            return
        self.state.enabled = flag
        if flag:
            self._start_task()
            logger.info("Autosave enabled every %d minute(s)", self.state.interval_minutes)
        else:
            self._stop_task()
            logger.info("Autosave disabled")
        self.broadcaster.broadcast(self.state)

    def toggle(self) -> None:
        self.set_enabled(not self.state.enabled)

    def set_interval_minutes(self, minutes: int) -> None:
        self.state.interval_minutes = minutes
        if self.state.enabled:
            self._start_task()
        logger.info("Autosave interval set to %d minute(s)", self.state.interval_minutes)
        self.broadcaster.broadcast(self.state)

    def shutdown(self) -> None:
        self._cancel_task()

    # ------------------------------------------------------------- internals ---
    def _start_task(self) -> None:
        period = self.state.interval_ms
        self._cancel_task()
        task = self._task_factory()
        task.schedule(period, self._on_fire)
        self._task = task
        self.state.next_deadline_ms = self._clock() + period

    def _stop_task(self) -> None:
        self._cancel_task()
        self.state.next_deadline_ms = None

    def _cancel_task(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        self._task = None

    def _on_fire(self) -> None:
        if not self.state.enabled:
            return

        try:
            self.host.post_command(SAVE_ALL_COMMAND_ID)
        except DispatchError as exc:
            self.state.record_fire(FireResult.failure(exc.code))
            logger.warning("Autosave dispatch failed with error %d", exc.code)
        else:
            self.state.record_fire(FireResult.success(self._local_now()))
            logger.debug("Autosave dispatched")

        self.state.next_deadline_ms = self._clock() + self.state.interval_ms
        self.broadcaster.broadcast(self.state)
