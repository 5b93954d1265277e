# src/nightly_build/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

NO_ACTIVITY = "no_activity"


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    The only transition is pending -> completed, and it is never reversed.
    """

    PENDING = "pending"
    COMPLETED = "completed"


class LogAction(StrEnum):
    TASK_CREATED = "task_created"
    TASK_COMPLETED = "task_completed"
    HEARTBEAT = "heartbeat"
    HEARTBEAT_CHECK_COMPLETED = "heartbeat_check_completed"


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_ts(ts: datetime) -> str:
    return ts.astimezone(UTC).isoformat()


def parse_ts(raw: Any) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not isinstance(raw, str) or not raw:
        raise ValueError(f"invalid timestamp: {raw!r}")
    ts = datetime.fromisoformat(raw)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def unique_tags(tags: Any) -> list[str]:
    out: list[str] = []
    for t in tags or []:
        s = str(t)
        if s not in out:
            out.append(s)
    return out


@dataclass(slots=True)
class TaskOptions:
    """Optional fields accepted by TaskRepository.add_task."""

    priority: Priority = Priority.MEDIUM
    description: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str
    priority: Priority
    status: TaskStatus
    created_at: datetime
    completed_at: datetime | None = None
    completion_notes: str | None = None
    heartbeat_cycles: int = 0
    tags: list[str] = field(default_factory=list)

    def age_hours(self, now: datetime) -> int:
        return int((now - self.created_at).total_seconds() // 3600)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "status": self.status.value,
            "createdAt": format_ts(self.created_at),
            "completedAt": format_ts(self.completed_at) if self.completed_at else None,
            "completionNotes": self.completion_notes,
            "heartbeatCycles": self.heartbeat_cycles,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from its JSON record.

        Raises KeyError/ValueError/TypeError on malformed records; the store
        turns those into ParseError.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"task record must be an object, got {type(raw).__name__}")

        completed_raw = raw.get("completedAt")
        notes = raw.get("completionNotes")
        cycles = int(raw.get("heartbeatCycles") or 0)
        if cycles < 0:
            raise ValueError(f"heartbeatCycles must be >= 0, got {cycles}")

        status = TaskStatus(raw.get("status") or TaskStatus.PENDING)
        if (status == TaskStatus.COMPLETED) != bool(completed_raw):
            raise ValueError(f"status={status.value} does not match completedAt={completed_raw!r}")

        return cls(
            id=str(raw["id"]),
            title=str(raw["title"]),
            description=str(raw.get("description") or ""),
            priority=Priority(raw.get("priority") or Priority.MEDIUM),
            status=status,
            created_at=parse_ts(raw["createdAt"]),
            completed_at=parse_ts(completed_raw) if completed_raw else None,
            completion_notes=None if notes is None else str(notes),
            heartbeat_cycles=cycles,
            tags=unique_tags(raw.get("tags")),
        )


@dataclass(slots=True)
class LogEntry:
    timestamp: datetime
    action: str
    task_id: str | None = None
    # action-specific fields (title, notes, taskWorkedOn, activity, ...)
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def activity(self) -> str | None:
        val = self.details.get("activity")
        return None if val is None else str(val)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "timestamp": format_ts(self.timestamp),
            "action": str(self.action),
            "taskId": self.task_id,
        }
        for key, val in self.details.items():
            out.setdefault(key, val)
        return out

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> LogEntry:
        if not isinstance(raw, dict):
            raise TypeError(f"log entry must be an object, got {type(raw).__name__}")
        task_id = raw.get("taskId")
        details = {k: v for k, v in raw.items() if k not in ("timestamp", "action", "taskId")}
        return cls(
            timestamp=parse_ts(raw["timestamp"]),
            action=str(raw["action"]),
            task_id=None if task_id is None else str(task_id),
            details=details,
        )
