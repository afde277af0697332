from unittest.mock import Mock, call

import pytest

from autodavesave.core.host import SAVE_ALL_COMMAND_ID, DispatchError
from autodavesave.core.scheduler import AutosaveScheduler
from autodavesave.core.state import FireResult, SchedulerState


@pytest.fixture
def state():
    return SchedulerState()


@pytest.fixture
def scheduler(state, host, broadcaster, tasks, clock, local_now):
    return AutosaveScheduler(state, host, broadcaster, tasks, clock=clock, local_now=local_now)


def test_load_arms_with_default_interval(scheduler, state, tasks, clock):
    assert state.next_deadline_ms == clock.now + 180000
    assert len(tasks.active) == 1
    assert tasks.active[0].period_ms == 180000
    assert scheduler.has_active_task


def test_disabled_state_starts_without_task(host, broadcaster, tasks, clock):
    state = SchedulerState(enabled=False, next_deadline_ms=123)
    scheduler = AutosaveScheduler(state, host, broadcaster, tasks, clock=clock)
    assert tasks.created == []
    assert state.next_deadline_ms is None
    assert not scheduler.has_active_task


def test_interval_change_while_enabled_restarts_from_now(scheduler, state, tasks, clock):
    old_task = tasks.active[0]
    clock.advance(60000)
    scheduler.set_interval_minutes(10)

    assert not old_task.active
    assert len(tasks.active) == 1
    assert tasks.active[0].period_ms == 600000
    assert state.next_deadline_ms == clock.now + 600000


def test_interval_change_while_disabled_has_no_task_side_effect(scheduler, state, tasks):
    scheduler.set_enabled(False)
    created = len(tasks.created)
    scheduler.set_interval_minutes(0)

    assert state.interval_minutes == 1
    assert len(tasks.created) == created
    assert tasks.active == []
    assert state.next_deadline_ms is None


def test_disable_clears_deadline_and_cancels(scheduler, state, tasks):
    task = tasks.active[0]
    scheduler.set_enabled(False)

    assert state.enabled is False
    assert state.next_deadline_ms is None
    assert not task.active
    assert not scheduler.has_active_task


def test_set_enabled_with_current_value_does_not_churn(scheduler, tasks):
    scheduler.set_enabled(True)
    assert len(tasks.created) == 1
    assert tasks.created[0].cancel_count == 0


def test_reenable_uses_new_deadline(scheduler, state, tasks, clock):
    first_deadline = state.next_deadline_ms
    clock.advance(45000)
    scheduler.set_enabled(False)
    clock.advance(30000)
    scheduler.set_enabled(True)

    assert state.interval_minutes == 3
    assert state.next_deadline_ms == clock.now + 180000
    assert state.next_deadline_ms != first_deadline
    assert len(tasks.active) == 1


def test_no_dispatch_while_disabled(scheduler, host, tasks, clock):
    stale = tasks.active[0]
    scheduler.set_enabled(False)
    clock.advance(10 * 180000)
    # A tick that was already queued before the disable was processed.
    stale.on_fire()

    host.post_command.assert_not_called()


def test_fire_success_records_timestamp(scheduler, state, host, tasks, clock, local_now):
    clock.advance(180000)
    tasks.active[0].fire()

    host.post_command.assert_called_once_with(SAVE_ALL_COMMAND_ID)
    assert state.last_fire_result == FireResult.success(local_now())
    assert state.last_success_at == local_now()
    assert state.next_deadline_ms == clock.now + 180000


def test_fire_failure_records_code_and_keeps_cadence(scheduler, state, host, tasks, clock):
    host.post_command.side_effect = DispatchError(5)
    clock.advance(180000)
    task = tasks.active[0]
    task.fire()

    assert state.last_fire_result == FireResult.failure(5)
    assert state.enabled is True
    assert state.next_deadline_ms == clock.now + 180000
    assert task.active
    assert len(tasks.created) == 1


def test_toggle_twice_restores(scheduler, state):
    scheduler.toggle()
    assert state.enabled is False
    scheduler.toggle()
    assert state.enabled is True


def test_every_mutation_broadcasts(state, host, tasks, clock):
    broadcaster = Mock()
    scheduler = AutosaveScheduler(state, host, broadcaster, tasks, clock=clock)

    scheduler.set_interval_minutes(1)
    scheduler.set_enabled(False)
    scheduler.set_enabled(True)
    tasks.active[0].fire()

    assert broadcaster.broadcast.call_args_list == [call(state)] * 4


def test_at_most_one_active_task(scheduler, tasks):
    for minutes in (1, 10, 3, -2, 10):
        scheduler.set_interval_minutes(minutes)
        assert len(tasks.active) == 1
    scheduler.set_enabled(False)
    assert tasks.active == []
    scheduler.set_enabled(True)
    scheduler.set_interval_minutes(1)
    assert len(tasks.active) == 1


def test_shutdown_cancels(scheduler, tasks):
    scheduler.shutdown()
    assert tasks.active == []
