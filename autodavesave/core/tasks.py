"""Abstract cancellable periodic task used by the scheduler and the debug view."""

from __future__ import annotations

from typing import Callable, Protocol


class DeferredTask(Protocol):
    def schedule(self, period_ms: int, on_fire: Callable[[], None]) -> None: ...

    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


TaskFactory = Callable[[], DeferredTask]
