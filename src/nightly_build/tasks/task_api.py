# src/nightly_build/tasks/task_api.py

"""Operations that need both the repository and settings, wired through AppState."""

from __future__ import annotations

import logging

from ..config import DEFAULT_MAX_IDLE_HEARTBEATS
from ..core.state import AppState
from .anti_slacking import SlackingCheck, check_anti_slacking
from .report import MorningReport, generate_morning_report

logger = logging.getLogger(__name__)


def check_slacking(state: AppState) -> SlackingCheck:
    settings = state.settings
    return check_anti_slacking(
        state.store,
        enabled=bool(getattr(settings, "anti_slacking_enabled", True)),
        max_idle_heartbeats=int(getattr(settings, "max_idle_heartbeats", DEFAULT_MAX_IDLE_HEARTBEATS)),
        now=state.clock(),
    )


def morning_report(state: AppState) -> MorningReport:
    slacking = check_slacking(state)
    report = generate_morning_report(state.repo, state.store, slacking, now=state.clock())
    logger.debug(
        "Morning report completed=%d pending=%d heartbeats=%d",
        report.tasks_completed,
        report.tasks_pending,
        report.heartbeats,
    )
    return report
