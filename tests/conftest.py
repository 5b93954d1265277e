# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from nightly_build.cli.bootstrap import create_initial_state
from nightly_build.core.state import AppState
from nightly_build.tasks.task_store import JsonTaskStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the task modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any config.json.
    """
    return SimpleNamespace(
        app_name="nightly-build-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        tasks_file=tmp_path / "tasks.json",
        logs_file=tmp_path / "activity.log",
        anti_slacking_enabled=True,
        max_idle_heartbeats=3,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(settings: SimpleNamespace) -> JsonTaskStore:
    return JsonTaskStore(settings.tasks_file, settings.logs_file)


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock) -> AppState:
    """
    AppState wired with a fake clock.

    NOTE: the real JSON store is kept here because its file format is part
    of what we want to test.
    """
    return create_initial_state(settings=settings, clock=clock)
