"""
AutoDaveSave plugin context.

One instance is created per host load. It owns the scheduler state and every
component that reads or writes it; nothing is reachable through module globals.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

from .config import PLUGIN_NAME
from .core.broadcaster import StateSyncBroadcaster, checked_states
from .core.commands import Command, CommandItem
from .core.debug_view import DebugTelemetryView, SurfaceFactory
from .core.host import Host
from .core.scheduler import AutosaveScheduler
from .core.state import SchedulerState, monotonic_millis
from .core.tasks import TaskFactory

logger = logging.getLogger(__name__)

# Returns an object with bring_to_front() and close(), or None when no panel can be shown.
AboutFactory = Callable[[], Optional[Any]]


class AutoDaveSavePlugin:
    name = PLUGIN_NAME

    def __init__(
        self,
        task_factory: TaskFactory,
        clock: Callable[[], int] = monotonic_millis,
        local_now: Callable[[], datetime] = datetime.now,
        debug_surface_factory: Optional[SurfaceFactory] = None,
        about_factory: Optional[AboutFactory] = None,
    ) -> None:
        self._task_factory = task_factory
        self._clock = clock
        self._local_now = local_now
        self._debug_surface_factory = debug_surface_factory
        self._about_factory = about_factory
        self._about: Optional[Any] = None

        self.state: Optional[SchedulerState] = None
        self.broadcaster: Optional[StateSyncBroadcaster] = None
        self.scheduler: Optional[AutosaveScheduler] = None
        self.debug_view: Optional[DebugTelemetryView] = None

    @property
    def loaded(self) -> bool:
        return self.scheduler is not None

    # ------------------------------------------------------------- host hooks ---
    def load(self, host: Host) -> List[CommandItem]:
        if self.loaded:
            self.unload()

        self.state = SchedulerState()
        self.broadcaster = StateSyncBroadcaster()
        self.scheduler = AutosaveScheduler(
            self.state,
            host,
            self.broadcaster,
            self._task_factory,
            clock=self._clock,
            local_now=self._local_now,
        )
        self.debug_view = DebugTelemetryView(
            self.state,
            self.broadcaster,
            self._task_factory,
            self._debug_surface_factory,
            clock=self._clock,
        )
        # The host builds its menu from the returned items; on_host_ready
        # pushes the checked states again once that menu exists.
        self.broadcaster.attach_host(host)
        logger.info("%s loaded, autosave every %d minute(s)", self.name, self.state.interval_minutes)
        return self.command_items()

    def command_items(self) -> List[CommandItem]:
        states = checked_states(self.state)
        return [
            CommandItem(
                command=command,
                label=command.label,
                checked=states.get(command, False),
                callback=lambda command=command: self.handle_command(command),
            )
            for command in Command
        ]

    def on_host_ready(self) -> None:
        if not self.loaded:
            return
        self.broadcaster.broadcast(self.state)

    def unload(self) -> None:
        if not self.loaded:
            return
        self.scheduler.shutdown()
        self.debug_view.close()
        self._close_about()
        self.broadcaster.detach_host()
        self.scheduler = None
        self.debug_view = None
        logger.info("%s unloaded", self.name)

    # --------------------------------------------------------------- commands ---
    def handle_command(self, command: Command) -> None:
        if not self.loaded:
            return

        if command is Command.TOGGLE_AUTOSAVE:
            self.scheduler.toggle()
        elif command.interval_minutes is not None:
            self.scheduler.set_interval_minutes(command.interval_minutes)
        elif command is Command.TOGGLE_DEBUG:
            self.set_debug_enabled(not self.state.debug_enabled)
        elif command is Command.ABOUT:
            self.show_about()

    def set_debug_enabled(self, flag: bool) -> None:
        self.state.debug_enabled = bool(flag)
        if self.state.debug_enabled:
            self.debug_view.show()
        else:
            self.debug_view.hide()
        self.broadcaster.broadcast(self.state)

    def show_about(self) -> None:
        if self._about is not None:
            self._about.bring_to_front()
            return
        if self._about_factory is None:
            return
        try:
            self._about = self._about_factory()
        except RuntimeError:
            logger.exception("Could not create about panel")
            self._about = None

    def _close_about(self) -> None:
        if self._about is not None:
            self._about.close()
            self._about = None
