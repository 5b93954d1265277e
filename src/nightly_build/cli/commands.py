# src/nightly_build/cli/commands.py

from __future__ import annotations

import json
import logging
from collections.abc import Callable

from ..core.state import AppState
from ..errors import UsageError
from ..tasks.task_api import check_slacking, morning_report
from ..tasks.report import REPORT_WINDOW
from ..tasks.task_models import Priority, TaskOptions

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

PROG = "nightly-build"

WORKING_ACTIVITY = "working_on_task"
HEARTBEAT_CHECK_ACTIVITY = "heartbeat_check_completed"

_PRIORITY_MARK = {Priority.HIGH: "🔴", Priority.MEDIUM: "🟡", Priority.LOW: "🟢"}

RULE = "═" * 43


class CommandRegistry:
    """Subcommand registry used by the CLI entry points (add, list, help, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, tuple[str, str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str = "",
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = (usage, help_text)
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def names(self) -> list[str]:
        return list(self._help)

    def handle(self, state: AppState, argv: list[str]) -> str:
        """
        Run argv = [command, *args] and return the text to print.

        Raises UsageError for unknown commands or bad arguments.
        """
        name = (argv[0] if argv else "help").lower()
        args = list(argv[1:])

        handler = self._handlers.get(name)
        if handler is None:
            raise UsageError(f"Unknown command: {name}", usage=self.build_help())

        logger.debug("Running command %s args=%s", name, args)
        return handler(state, args)

    def build_help(self) -> str:
        rows = [(f"{name} {usage}".strip(), text) for name, (usage, text) in self._help.items()]
        width = max((len(r[0]) for r in rows), default=0) + 2
        lines = ["", "Nightly Build System - Commands:", ""]
        for left, text in rows:
            lines.append(f"  {left.ljust(width)}{text}")
        return "\n".join(lines) + "\n"


registry = CommandRegistry()


def split_args(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """Separate positional arguments from --key=value options."""
    positional: list[str] = []
    options: dict[str, str] = {}
    for arg in args:
        if arg.startswith("--"):
            key, sep, value = arg[2:].partition("=")
            options[key.lower()] = value if sep else ""
        else:
            positional.append(arg)
    return positional, options


def _usage(command: str, rest: str) -> str:
    return f"Usage: {PROG} {command} {rest}".rstrip()


def _parse_priority(raw: str | None) -> Priority:
    if raw is None or raw == "":
        return Priority.MEDIUM
    try:
        return Priority(raw.strip().lower())
    except ValueError:
        raise UsageError(
            f"Invalid priority: {raw}",
            usage=_usage("add", '"Task title" [--priority=high|medium|low]'),
        ) from None


def cmd_add(state: AppState, args: list[str]) -> str:
    positional, options = split_args(args)
    title = positional[0].strip() if positional else ""
    if not title:
        raise UsageError(
            "Missing task title",
            usage=_usage("add", '"Task title" [--priority=high|medium|low]'),
        )

    raw_tags = options.get("tags", "")
    opts = TaskOptions(
        priority=_parse_priority(options.get("priority")),
        description=options.get("description", ""),
        tags=[t.strip() for t in raw_tags.split(",") if t.strip()],
    )
    task = state.repo.add_task(title, opts)
    return (
        f"✓ Task created: {task.id}\n"
        f"  Title: {task.title}\n"
        f"  Priority: {task.priority.value}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    pending = state.repo.get_pending_tasks()
    if not pending:
        return "No pending tasks! Great job, or great slacking..."

    now = state.clock()
    lines = ["", f"📋 {len(pending)} Pending Tasks:", ""]
    for i, task in enumerate(pending, start=1):
        lines.append(f"{i}. [{task.priority.value.upper()}] {task.title}")
        lines.append(f"   ID: {task.id}")
        lines.append(f"   Age: {task.age_hours(now)}h | Heartbeats: {task.heartbeat_cycles}")
        lines.append("")
    return "\n".join(lines)


def cmd_complete(state: AppState, args: list[str]) -> str:
    positional, _ = split_args(args)
    if not positional:
        raise UsageError("Missing task id", usage=_usage("complete", '<task-id> ["notes"]'))

    task_id = positional[0]
    notes = " ".join(positional[1:])
    task = state.repo.complete_task(task_id, notes)
    return f"✓ Completed: {task.title}"


def cmd_heartbeat(state: AppState, args: list[str]) -> str:
    """Recommend the next task and show the anti-slacking warning. Logs nothing."""
    lines: list[str] = []
    next_task = state.repo.get_next_task_for_heartbeat()
    if next_task:
        lines.append("")
        lines.append("🎯 Recommended task for this heartbeat:")
        lines.append(f'   "{next_task.title}" [{next_task.priority.value.upper()}]')
        lines.append(f"   ID: {next_task.id}")
        lines.append("")
        lines.append(f"   Run: {PROG} working {next_task.id}")
    else:
        lines.append("")
        lines.append(f'🎯 No pending tasks. Create one with: {PROG} add "task name"')

    slacking = check_slacking(state)
    if slacking.slacking:
        lines.append("")
        lines.append(f"⚠️  {slacking.message}")
    return "\n".join(lines)


def cmd_working(state: AppState, args: list[str]) -> str:
    positional, _ = split_args(args)
    if not positional:
        raise UsageError("Missing task id", usage=_usage("working", "<task-id>"))

    task_id = positional[0]
    state.repo.record_heartbeat(task_id=task_id, description=WORKING_ACTIVITY)
    return f"✓ Logged heartbeat activity for task {task_id}"


def cmd_morning_report(state: AppState, args: list[str]) -> str:
    _, options = split_args(args)
    report = morning_report(state)

    if "json" in options:
        return json.dumps(report.to_dict(), ensure_ascii=False, indent=2)

    lines = [
        "",
        "╔════════════════════════════════════════╗",
        "║      🌅 NIGHTLY BUILD MORNING REPORT     ║",
        "╠════════════════════════════════════════╣",
        f"║ Date: {report.date}".ljust(41) + "║",
        "╚════════════════════════════════════════╝",
        "",
        "📊 Summary:",
        f"   Tasks completed: {report.tasks_completed}",
        f"   Tasks pending: {report.tasks_pending}",
        f"   Heartbeats: {report.heartbeats}",
    ]

    if report.warnings:
        lines += ["", "⚠️  Warnings:"]
        lines += [f"   {w}" for w in report.warnings]

    if report.completed_tasks:
        lines += ["", "✅ Completed:"]
        for item in report.completed_tasks:
            lines.append(f"   • {item.title}")
            if item.notes:
                lines.append(f"     Notes: {item.notes}")

    if report.pending_tasks:
        lines += ["", "📋 Top Pending:"]
        for p in report.pending_tasks:
            lines.append(f"   [{p.priority.upper()}] {p.title} ({p.age})")

    if report.next_recommended_task:
        lines += ["", f'🎯 Next up: "{report.next_recommended_task}"']

    lines += ["", RULE, ""]
    return "\n".join(lines)


def cmd_heartbeat_check(state: AppState, args: list[str]) -> str:
    """
    Periodic check-in: status, slacking alert, next task, then log a heartbeat.

    --report  append a mini morning report
    """
    _, options = split_args(args)
    repo = state.repo
    now = state.clock()

    lines = ["", "🦞 Nightly Build System - Heartbeat Check", RULE, ""]

    pending = repo.get_pending_tasks()
    completed = repo.get_completed_tasks(since=now - REPORT_WINDOW)
    lines.append(f"📊 Status: {len(completed)} completed today, {len(pending)} pending")

    slacking = check_slacking(state)
    if slacking.slacking:
        lines.append("")
        lines.append(f"⚠️  ANTI-SLACKING ALERT: {slacking.message}")
        lines.append("   Time to ship something!")
        lines.append("")

    next_task = repo.get_next_task_for_heartbeat()
    if next_task:
        mark = _PRIORITY_MARK.get(next_task.priority, "⚪")
        lines += [
            "",
            "🎯 NEXT TASK:",
            f"   {mark} {next_task.title}",
            f"   Priority: {next_task.priority.value.upper()}",
            f"   ID: {next_task.id}",
            f"   Age: {next_task.age_hours(now)}h",
            "",
            "   To start working:",
            f"   {PROG} working {next_task.id}",
            f'   {PROG} complete {next_task.id} "notes"',
        ]
    else:
        lines += [
            "",
            "✨ No pending tasks! Create one:",
            f'   {PROG} add "New task description" --priority=high',
        ]

    repo.record_heartbeat(task_id=None, description=HEARTBEAT_CHECK_ACTIVITY)

    lines += ["", RULE, ""]

    if "report" in options:
        report = morning_report(state)
        lines.append("📋 Mini Report:")
        lines.append(f"   Tasks done: {report.tasks_completed}")
        lines.append(f"   Next up: {report.next_recommended_task or 'Nothing!'}")

    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


registry.register(
    "add",
    cmd_add,
    help_text="Create a new task",
    usage='"title" [--priority=high|medium|low] [--description=..] [--tags=a,b]',
)
registry.register("list", cmd_list, help_text="Show pending tasks", aliases=["ls"])
registry.register("complete", cmd_complete, help_text="Mark task as done", usage='<id> ["notes"]')
registry.register("heartbeat", cmd_heartbeat, help_text="Get next task for heartbeat")
registry.register("working", cmd_working, help_text="Log work on a task", usage="<id>")
registry.register(
    "morning-report", cmd_morning_report, help_text="Generate status report", usage="[--json]"
)
registry.register(
    "heartbeat-check",
    cmd_heartbeat_check,
    help_text="Run a heartbeat check-in (logs a heartbeat)",
    usage="[--report]",
)
registry.register("help", cmd_help, help_text="Show this help", aliases=["-h", "--help"])
