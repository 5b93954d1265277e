# src/nightly_build/tasks/task_selector.py

from __future__ import annotations

"""
Next-task selection for heartbeats.

Pending tasks are ranked by priority (high > medium > low), then by age
(oldest first). Python's sort is stable, so tasks with equal keys keep their
insertion order.
"""

from collections.abc import Iterable

from .task_models import Priority, Task, TaskStatus

_PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def priority_rank(priority: Priority | str) -> int:
    return _PRIORITY_RANK.get(Priority(priority), 0)


def sort_for_heartbeat(tasks: Iterable[Task]) -> list[Task]:
    pending = [t for t in tasks if t.status == TaskStatus.PENDING]
    return sorted(pending, key=lambda t: (-priority_rank(t.priority), t.created_at))


def get_next_task_for_heartbeat(tasks: Iterable[Task]) -> Task | None:
    ranked = sort_for_heartbeat(tasks)
    return ranked[0] if ranked else None
