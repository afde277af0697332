"""
Scheduler state for AutoDaveSave.

Deadlines are monotonic milliseconds. The success timestamp shown to the user
is local wall time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
import time

from ..config import DEFAULTS

MILLIS_PER_MINUTE = 60 * 1000


def monotonic_millis() -> int:
    return int(time.monotonic() * 1000)


def clamp_interval(minutes: int) -> int:
    minutes = int(minutes)
    return 1 if minutes <= 0 else minutes


def interval_ms(minutes: int) -> int:
    return clamp_interval(minutes) * MILLIS_PER_MINUTE


@dataclass(frozen=True)
class FireResult:
    """Outcome of a single dispatch attempt."""

    saved_at: Optional[datetime] = None
    error_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error_code is None

    @staticmethod
    def success(when: datetime) -> "FireResult":
        return FireResult(saved_at=when)

    @staticmethod
    def failure(code: int) -> "FireResult":
        return FireResult(error_code=int(code))


@dataclass
class SchedulerState:
    enabled: bool = DEFAULTS.enabled
    interval_minutes: int = DEFAULTS.interval_minutes
    debug_enabled: bool = DEFAULTS.debug_enabled
    next_deadline_ms: Optional[int] = None
    last_fire_result: Optional[FireResult] = None
    last_success_at: Optional[datetime] = field(default=None)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "interval_minutes":
            value = clamp_interval(value)
        super().__setattr__(name, value)

    @property
    def interval_ms(self) -> int:
        return interval_ms(self.interval_minutes)

    def remaining_ms(self, now_ms: int) -> Optional[int]:
        if not self.enabled or self.next_deadline_ms is None:
            return None
        return max(0, self.next_deadline_ms - now_ms)

    def record_fire(self, result: FireResult) -> None:
        self.last_fire_result = result
        if result.ok:
            self.last_success_at = result.saved_at
