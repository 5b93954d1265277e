# src/nightly_build/tasks/task_repository.py

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from ..core.ports import Clock, TaskStorePort
from ..errors import NotFoundError
from .task_models import (
    NO_ACTIVITY,
    LogAction,
    LogEntry,
    Task,
    TaskOptions,
    TaskStatus,
    unique_tags,
    utc_now,
)
from .task_selector import get_next_task_for_heartbeat

logger = logging.getLogger(__name__)


def new_task_id() -> str:
    return uuid.uuid4().hex


class TaskRepository:
    """
    In-memory task list backed by a TaskStorePort.

    The list is loaded once on construction. Every mutation rewrites the whole
    task document and appends one activity log entry.
    """

    def __init__(self, store: TaskStorePort, *, clock: Clock = utc_now) -> None:
        self._store = store
        self._clock = clock
        self._tasks: list[Task] = store.load_tasks()
        logger.debug("TaskRepository ready total=%d", len(self._tasks))

    @property
    def tasks(self) -> list[Task]:
        """Snapshot of all tasks in insertion order."""
        return list(self._tasks)

    # ---- helpers ----

    def _persist(self) -> None:
        self._store.save_tasks(self._tasks)

    def _log(self, action: LogAction, task_id: str | None = None, **details) -> LogEntry:
        entry = LogEntry(timestamp=self._clock(), action=action, task_id=task_id, details=details)
        self._store.append_log_entry(entry)
        return entry

    # ---- queries ----

    def get_task(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def get_pending_tasks(self) -> list[Task]:
        return [t for t in self._tasks if t.status == TaskStatus.PENDING]

    def get_completed_tasks(self, since: datetime | None = None) -> list[Task]:
        completed = [t for t in self._tasks if t.status == TaskStatus.COMPLETED]
        if since is not None:
            completed = [
                t for t in completed if t.completed_at is not None and t.completed_at >= since
            ]
        return completed

    def get_next_task_for_heartbeat(self) -> Task | None:
        return get_next_task_for_heartbeat(self._tasks)

    # ---- mutations ----

    def add_task(self, title: str, options: TaskOptions | None = None) -> Task:
        if not title or not title.strip():
            raise ValueError("title is required")
        opts = options or TaskOptions()

        task = Task(
            id=new_task_id(),
            title=title,
            description=opts.description,
            priority=opts.priority,
            status=TaskStatus.PENDING,
            created_at=self._clock(),
            tags=unique_tags(opts.tags),
        )
        self._tasks.append(task)
        self._persist()
        self._log(LogAction.TASK_CREATED, task.id, title=title)
        logger.info("Task added id=%s priority=%s", task.id, task.priority.value)
        return task

    def complete_task(self, task_id: str, notes: str = "") -> Task:
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError(task_id)

        if task.status == TaskStatus.COMPLETED:
            # Re-completion overwrites completedAt/notes.
            logger.warning("Task %s was already completed; overwriting", task_id)

        task.status = TaskStatus.COMPLETED
        task.completed_at = self._clock()
        task.completion_notes = notes
        self._persist()
        self._log(LogAction.TASK_COMPLETED, task_id, title=task.title, notes=notes)
        logger.info("Task completed id=%s", task_id)
        return task

    def record_heartbeat(
        self,
        task_id: str | None = None,
        description: str | None = None,
    ) -> LogEntry:
        entry = self._log(
            LogAction.HEARTBEAT,
            task_id,
            taskWorkedOn=task_id,
            activity=description or NO_ACTIVITY,
        )

        if task_id:
            task = self.get_task(task_id)
            if task is not None:
                task.heartbeat_cycles += 1
                self._persist()
            else:
                logger.warning("Heartbeat for unknown task id=%s", task_id)

        return entry
