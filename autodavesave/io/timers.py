"""QTimer-backed periodic tasks."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class QtDeferredTask(QObject):
    """Repeating task driven by the Qt event loop. Fires on the GUI thread."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setSingleShot(False)
        self._timer.timeout.connect(self._fire)
        self._on_fire: Optional[Callable[[], None]] = None

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    @property
    def period_ms(self) -> int:
        return self._timer.interval()

    def schedule(self, period_ms: int, on_fire: Callable[[], None]) -> None:
        self._on_fire = on_fire
        self._timer.start(max(1, int(period_ms)))

    def cancel(self) -> None:
        self._timer.stop()
        self._on_fire = None

    def _fire(self) -> None:
        if self._on_fire is not None:
            self._on_fire()


def qt_task_factory(parent: QObject | None = None) -> Callable[[], QtDeferredTask]:
    def factory() -> QtDeferredTask:
        return QtDeferredTask(parent)

    return factory
