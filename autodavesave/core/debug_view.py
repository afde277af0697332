from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from ..config import DEFAULTS
from .broadcaster import StateSyncBroadcaster
from .state import SchedulerState, monotonic_millis
from .tasks import DeferredTask, TaskFactory
from .telemetry import render_debug_text

logger = logging.getLogger(__name__)


class DebugSurface(Protocol):
    def set_text(self, text: str) -> None: ...

    def bring_to_front(self) -> None: ...

    def dispose(self) -> None: ...


# Called with the view's user-close handler; returns None when no window can be made.
SurfaceFactory = Callable[[Callable[[], None]], Optional[DebugSurface]]


class ViewState(Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"


class DebugTelemetryView:
    """
    Read-only countdown window with its own refresh task.

    The refresh task lives only while the view is visible and is independent of
    the autosave task. Rendering never mutates the state; the only write is
    clearing ``debug_enabled`` when the user closes the window.
    """

    def __init__(
        self,
        state: SchedulerState,
        broadcaster: StateSyncBroadcaster,
        task_factory: TaskFactory,
        surface_factory: Optional[SurfaceFactory],
        clock: Callable[[], int] = monotonic_millis,
        refresh_ms: int = DEFAULTS.debug_refresh_ms,
    ) -> None:
        self.state = state
        self.broadcaster = broadcaster
        self._task_factory = task_factory
        self._surface_factory = surface_factory
        self._clock = clock
        self._refresh_ms = refresh_ms
        self._surface: Optional[DebugSurface] = None
        self._task: Optional[DeferredTask] = None
        self.view_state = ViewState.HIDDEN
        broadcaster.subscribe(self._on_state_changed)

    @property
    def visible(self) -> bool:
        return self.view_state is ViewState.VISIBLE

    def show(self) -> None:
        if self.visible:
            self._surface.bring_to_front()
            return

        surface = self._create_surface()
        if surface is None:
            return

        self._surface = surface
        self.view_state = ViewState.VISIBLE
        task = self._task_factory()
        task.schedule(self._refresh_ms, self.refresh)
        self._task = task
        self.refresh()

    def hide(self) -> None:
        if not self.visible:
            return
        surface = self._surface
        self._teardown()
        surface.dispose()

    def handle_user_close(self) -> None:
        if not self.visible:
            return
        self._teardown()
        if self.state.debug_enabled:
            self.state.debug_enabled = False
            self.broadcaster.broadcast(self.state)

    def refresh(self) -> None:
        if not self.visible:
            return
        self._surface.set_text(self.render())

    def render(self) -> str:
        return render_debug_text(self.state, self._clock())

    def close(self) -> None:
        self.hide()
        self.broadcaster.unsubscribe(self._on_state_changed)

    def _on_state_changed(self, _state: SchedulerState) -> None:
        self.refresh()

    def _create_surface(self) -> Optional[DebugSurface]:
        if self._surface_factory is None:
            logger.warning("No debug window available; debug view left inactive")
            return None
        try:
            surface = self._surface_factory(self.handle_user_close)
        except RuntimeError:
            logger.exception("Could not create debug window")
            return None
        if surface is None:
            logger.warning("Debug window creation failed; debug view left inactive")
        return surface

    def _teardown(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._surface = None
        self.view_state = ViewState.HIDDEN
