"""Capabilities the plugin consumes from its host application."""

from __future__ import annotations

from typing import Protocol

from .commands import Command

# File -> Save All in the host's command table.
SAVE_ALL_COMMAND_ID = 41007

ERROR_INVALID_PARAMETER = 87
ERROR_INVALID_WINDOW_HANDLE = 1400


class DispatchError(Exception):
    """The host refused to queue a command; ``code`` is the platform error code."""

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(message or f"dispatch failed with error {code}")
        self.code = int(code)


class Host(Protocol):
    def set_command_checked(self, command: Command, checked: bool) -> None: ...

    def post_command(self, command_id: int) -> None:
        """Queue ``command_id`` without waiting for it. Raises DispatchError."""
        ...
