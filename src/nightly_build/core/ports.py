# src/nightly_build/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task components.

The repository, monitor and report depend on these Protocols instead of the
JSON store, which keeps them testable with in-memory fakes.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Protocol

from ..tasks.task_models import LogEntry, Task

Clock = Callable[[], datetime]
# Returns an aware UTC datetime.


class LogSource(Protocol):
    def load_log_entries(self) -> list[LogEntry]: ...


class TaskStorePort(LogSource, Protocol):
    def load_tasks(self) -> list[Task]: ...
    def save_tasks(self, tasks: Sequence[Task]) -> None: ...
    def append_log_entry(self, entry: LogEntry) -> None: ...
