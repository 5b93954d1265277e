# tests/test_anti_slacking.py

from __future__ import annotations

import pytest

from nightly_build.core.state import AppState
from nightly_build.tasks.anti_slacking import check_anti_slacking
from nightly_build.tasks.task_api import check_slacking

from .fakes import FakeClock


class ExplodingLogSource:
    def load_log_entries(self):
        raise AssertionError("logs must not be read when the monitor is disabled")


def _idle(state: AppState, n: int) -> None:
    for _ in range(n):
        state.repo.record_heartbeat()


@pytest.mark.parametrize("threshold", [1, 3, 5])
def test_threshold_boundary(state: AppState, threshold: int) -> None:
    state.settings.max_idle_heartbeats = threshold

    _idle(state, threshold - 1)
    below = check_slacking(state)
    assert below.slacking is False
    assert below.idle_count == threshold - 1
    assert below.message is None

    _idle(state, 1)
    at = check_slacking(state)
    assert at.slacking is True
    assert at.idle_count == threshold
    assert at.message == f"WARNING: {threshold} idle heartbeats detected. Get to work!"


def test_disabled_monitor_never_reads_logs(clock: FakeClock) -> None:
    result = check_anti_slacking(
        ExplodingLogSource(), enabled=False, max_idle_heartbeats=1, now=clock()
    )
    assert result.slacking is False
    assert result.idle_count == 0


def test_disabled_by_settings(state: AppState) -> None:
    state.settings.anti_slacking_enabled = False
    _idle(state, 10)
    assert check_slacking(state).slacking is False


def test_only_idle_heartbeats_count(state: AppState) -> None:
    task = state.repo.add_task("real work")
    _idle(state, 2)
    state.repo.record_heartbeat(task_id=task.id, description="working_on_task")
    state.repo.record_heartbeat(description="heartbeat_check_completed")

    result = check_slacking(state)
    assert result.idle_count == 2
    assert result.slacking is False


def test_heartbeats_older_than_a_day_are_ignored(state: AppState, clock: FakeClock) -> None:
    _idle(state, 3)
    clock.advance(hours=24)

    result = check_slacking(state)
    assert result.idle_count == 0
    assert result.slacking is False

    clock.advance(hours=-1)
    assert check_slacking(state).idle_count == 3


def test_missing_threshold_setting_falls_back_to_default(state: AppState) -> None:
    del state.settings.max_idle_heartbeats

    _idle(state, 2)
    assert check_slacking(state).slacking is False
    _idle(state, 1)
    assert check_slacking(state).slacking is True
