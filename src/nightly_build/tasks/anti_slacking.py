# src/nightly_build/tasks/anti_slacking.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.ports import LogSource
from .task_models import NO_ACTIVITY, LogAction, LogEntry

logger = logging.getLogger(__name__)

IDLE_WINDOW = timedelta(hours=24)


@dataclass(slots=True, frozen=True)
class SlackingCheck:
    slacking: bool
    idle_count: int = 0
    message: str | None = None


def count_idle_heartbeats(entries: list[LogEntry], *, now: datetime) -> int:
    """Heartbeats younger than IDLE_WINDOW whose activity is no_activity."""
    count = 0
    for e in entries:
        if e.action != LogAction.HEARTBEAT:
            continue
        if now - e.timestamp >= IDLE_WINDOW:
            continue
        if e.activity == NO_ACTIVITY:
            count += 1
    return count


def check_anti_slacking(
    source: LogSource,
    *,
    enabled: bool,
    max_idle_heartbeats: int,
    now: datetime,
) -> SlackingCheck:
    if not enabled:
        return SlackingCheck(slacking=False)

    idle = count_idle_heartbeats(source.load_log_entries(), now=now)
    if idle >= max_idle_heartbeats:
        logger.info("Anti-slacking triggered idle=%d threshold=%d", idle, max_idle_heartbeats)
        return SlackingCheck(
            slacking=True,
            idle_count=idle,
            message=f"WARNING: {idle} idle heartbeats detected. Get to work!",
        )

    return SlackingCheck(slacking=False, idle_count=idle)
