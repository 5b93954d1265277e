# src/nightly_build/tasks/report.py

"""
Morning report: a summary of the trailing 24 hours.

The "top pending" slice is taken in list (insertion) order, not in
recommendation order; the recommendation is reported separately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from ..core.ports import LogSource
from .anti_slacking import SlackingCheck
from .task_models import LogAction, format_ts
from .task_repository import TaskRepository

REPORT_WINDOW = timedelta(hours=24)
TOP_PENDING_LIMIT = 5


@dataclass(slots=True, frozen=True)
class CompletedItem:
    title: str
    completed_at: datetime | None
    notes: str | None


@dataclass(slots=True, frozen=True)
class PendingItem:
    title: str
    priority: str
    age: str


@dataclass(slots=True)
class MorningReport:
    date: str
    tasks_completed: int
    tasks_pending: int
    heartbeats: int
    slacking_detected: bool
    completed_tasks: list[CompletedItem] = field(default_factory=list)
    pending_tasks: list[PendingItem] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    next_recommended_task: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "summary": {
                "tasksCompleted": self.tasks_completed,
                "tasksPending": self.tasks_pending,
                "heartbeats": self.heartbeats,
                "slackingDetected": self.slacking_detected,
            },
            "completedTasks": [
                {
                    "title": c.title,
                    "completedAt": format_ts(c.completed_at) if c.completed_at else None,
                    "notes": c.notes,
                }
                for c in self.completed_tasks
            ],
            "pendingTasks": [
                {"title": p.title, "priority": p.priority, "age": p.age}
                for p in self.pending_tasks
            ],
            "warnings": list(self.warnings),
            "nextRecommendedTask": self.next_recommended_task,
        }


def generate_morning_report(
    repo: TaskRepository,
    logs: LogSource,
    slacking: SlackingCheck,
    *,
    now: datetime,
) -> MorningReport:
    window_start = now - REPORT_WINDOW

    completed = repo.get_completed_tasks(since=window_start)
    pending = repo.get_pending_tasks()

    heartbeats = sum(
        1
        for e in logs.load_log_entries()
        if e.action == LogAction.HEARTBEAT and e.timestamp >= window_start
    )

    next_task = repo.get_next_task_for_heartbeat()

    return MorningReport(
        date=now.astimezone(UTC).date().isoformat(),
        tasks_completed=len(completed),
        tasks_pending=len(pending),
        heartbeats=heartbeats,
        slacking_detected=slacking.slacking,
        completed_tasks=[
            CompletedItem(title=t.title, completed_at=t.completed_at, notes=t.completion_notes)
            for t in completed
        ],
        pending_tasks=[
            PendingItem(title=t.title, priority=t.priority.value, age=f"{t.age_hours(now)}h")
            for t in pending[:TOP_PENDING_LIMIT]
        ],
        warnings=[slacking.message] if slacking.slacking and slacking.message else [],
        next_recommended_task=next_task.title if next_task else None,
    )
