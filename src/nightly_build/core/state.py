# src/nightly_build/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_repository import TaskRepository
from .ports import Clock, TaskStorePort


@dataclass
class AppState:
    # Settings (or any object with the same attributes, e.g. in tests).
    settings: Any

    store: TaskStorePort
    repo: TaskRepository
    clock: Clock
