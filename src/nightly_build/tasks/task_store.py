# src/nightly_build/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from ..errors import ParseError
from .task_models import LogEntry, Task

logger = logging.getLogger(__name__)


class JsonTaskStore:
    """
    File-backed task store.

    Two files:
    - tasks file: one pretty-printed JSON array, rewritten in full on every save
    - logs file: JSON lines, append-only

    A missing file reads as empty. Corrupt content raises ParseError.
    """

    def __init__(self, tasks_file: str | Path, logs_file: str | Path) -> None:
        self._tasks_file = Path(tasks_file)
        self._logs_file = Path(logs_file)

    @property
    def tasks_file(self) -> Path:
        return self._tasks_file

    @property
    def logs_file(self) -> Path:
        return self._logs_file

    # ---- tasks ----

    def load_tasks(self) -> list[Task]:
        path = self._tasks_file
        if not path.exists():
            logger.debug("Tasks file %s does not exist; starting empty", path)
            return []

        try:
            data = json.loads(path.read_text("utf-8"))
        except UnicodeDecodeError as e:
            raise ParseError(f"{path}: not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise ParseError(f"{path}: invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise ParseError(f"{path}: expected a JSON array, got {type(data).__name__}")

        tasks: list[Task] = []
        for i, raw in enumerate(data):
            try:
                tasks.append(Task.from_dict(raw))
            except (KeyError, TypeError, ValueError) as e:
                raise ParseError(f"{path}: invalid task record #{i}: {e!r}") from e

        logger.debug("Loaded %d tasks from %s", len(tasks), path)
        return tasks

    def save_tasks(self, tasks: Sequence[Task]) -> None:
        path = self._tasks_file
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2)

        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(payload + "\n", "utf-8")
        os.replace(tmp, path)
        logger.debug("Saved %d tasks to %s", len(tasks), path)

    # ---- activity log ----

    def append_log_entry(self, entry: LogEntry) -> None:
        path = self._logs_file
        path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        logger.debug("Logged action=%s task_id=%s", entry.action, entry.task_id)

    def load_log_entries(self) -> list[LogEntry]:
        path = self._logs_file
        if not path.exists():
            return []

        entries: list[LogEntry] = []
        with path.open("rb") as fh:
            for lineno, raw in enumerate(fh, start=1):
                try:
                    line = raw.decode("utf-8")
                    if not line.strip():
                        continue
                    entries.append(LogEntry.from_dict(json.loads(line)))
                except (UnicodeDecodeError, KeyError, TypeError, ValueError) as e:
                    raise ParseError(f"{path}:{lineno}: invalid log entry: {e}") from e
        return entries
