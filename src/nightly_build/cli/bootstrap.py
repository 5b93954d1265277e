# src/nightly_build/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires the JSON store and the repository into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.task_models import utc_now
from ..tasks.task_repository import TaskRepository
from ..tasks.task_store import JsonTaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, clock: Clock = utc_now) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = JsonTaskStore(settings.tasks_file, settings.logs_file)
    repo = TaskRepository(store, clock=clock)
    logger.debug("State ready tasks_file=%s logs_file=%s", settings.tasks_file, settings.logs_file)
    return AppState(settings=settings, store=store, repo=repo, clock=clock)
