import os
from datetime import datetime
from unittest.mock import Mock

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from autodavesave.core.broadcaster import StateSyncBroadcaster  # noqa: E402
from autodavesave.core.host import Host  # noqa: E402


class FakeClock:
    """Monotonic millisecond clock advanced by hand."""

    def __init__(self, start: int = 1_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeTask:
    def __init__(self) -> None:
        self.period_ms = None
        self.on_fire = None
        self.active = False
        self.cancel_count = 0

    def schedule(self, period_ms, on_fire):
        self.period_ms = period_ms
        self.on_fire = on_fire
        self.active = True

    def cancel(self):
        self.active = False
        self.cancel_count += 1

    def fire(self):
        assert self.active, "fired a cancelled task"
        self.on_fire()


class FakeTaskFactory:
    def __init__(self) -> None:
        self.created = []

    def __call__(self) -> FakeTask:
        task = FakeTask()
        self.created.append(task)
        return task

    @property
    def active(self):
        return [task for task in self.created if task.active]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def local_now():
    return lambda: datetime(2026, 10, 19, 9, 5, 7)


@pytest.fixture
def tasks():
    return FakeTaskFactory()


@pytest.fixture
def host():
    return Mock(spec=Host)


@pytest.fixture
def broadcaster(host):
    return StateSyncBroadcaster(host)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
