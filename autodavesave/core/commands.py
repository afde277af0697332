from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional


class Command(Enum):
    TOGGLE_AUTOSAVE = "toggle_autosave"
    INTERVAL_1 = "interval_1"
    INTERVAL_3 = "interval_3"
    INTERVAL_10 = "interval_10"
    TOGGLE_DEBUG = "toggle_debug"
    ABOUT = "about"

    @property
    def label(self) -> str:
        return COMMAND_LABELS[self]

    @property
    def checkable(self) -> bool:
        return self is not Command.ABOUT

    @property
    def interval_minutes(self) -> Optional[int]:
        return INTERVAL_PRESETS.get(self)


# Menu order matches declaration order.
COMMAND_LABELS: Dict[Command, str] = {
    Command.TOGGLE_AUTOSAVE: "Start or Stop Autosave",
    Command.INTERVAL_1: "Set Autosave to 1 Minute",
    Command.INTERVAL_3: "Set Autosave to 3 Minutes",
    Command.INTERVAL_10: "Set Autosave to 10 Minutes",
    Command.TOGGLE_DEBUG: "Show Timer Selection (Debug)",
    Command.ABOUT: "About AutoDaveSave",
}

INTERVAL_PRESETS: Dict[Command, int] = {
    Command.INTERVAL_1: 1,
    Command.INTERVAL_3: 3,
    Command.INTERVAL_10: 10,
}


@dataclass(frozen=True)
class CommandItem:
    command: Command
    label: str
    checked: bool
    callback: Callable[[], None]
