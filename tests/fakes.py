# tests/fakes.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta

from nightly_build.tasks.task_models import LogEntry, Task

T0 = datetime(2026, 10, 17, 8, 0, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    """Deterministic clock; advances only when told to."""

    now: datetime = T0

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@dataclass
class FakeTaskStore:
    """
    In-memory TaskStorePort used by repository unit tests.

    Saved tasks are copied so tests can check what was actually persisted.
    """

    saved: list[Task] = field(default_factory=list)
    entries: list[LogEntry] = field(default_factory=list)
    save_calls: int = 0

    def load_tasks(self) -> list[Task]:
        return [replace(t, tags=list(t.tags)) for t in self.saved]

    def save_tasks(self, tasks: Sequence[Task]) -> None:
        self.save_calls += 1
        self.saved = [replace(t, tags=list(t.tags)) for t in tasks]

    def append_log_entry(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def load_log_entries(self) -> list[LogEntry]:
        return list(self.entries)
