from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .commands import Command
from .host import Host
from .state import SchedulerState

StateListener = Callable[[SchedulerState], None]


def checked_states(state: SchedulerState) -> Dict[Command, bool]:
    states = {Command.TOGGLE_AUTOSAVE: state.enabled}
    for command in Command:
        minutes = command.interval_minutes
        if minutes is not None:
            states[command] = state.interval_minutes == minutes
    states[Command.TOGGLE_DEBUG] = state.debug_enabled
    return states


class StateSyncBroadcaster:
    """
    Pushes the scheduler state to the host's checkmarks and to every listener.

    Propagation is synchronous: callers broadcast once per mutation, before
    returning control to the event loop.
    """

    def __init__(self, host: Optional[Host] = None) -> None:
        self._host = host
        self._listeners: List[StateListener] = []

    def attach_host(self, host: Host) -> None:
        self._host = host

    def detach_host(self) -> None:
        self._host = None

    def subscribe(self, listener: StateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def broadcast(self, state: SchedulerState) -> None:
        if self._host is not None:
            for command, checked in checked_states(state).items():
                self._host.set_command_checked(command, checked)
        for listener in list(self._listeners):
            listener(state)
