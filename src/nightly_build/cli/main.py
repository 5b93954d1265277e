# src/nightly_build/cli/main.py

"""
CLI entrypoints.

Initializes logging, builds AppState, runs exactly one command and maps the
outcome to an exit code:
- 0 on success,
- 1 on usage errors and failed operations (unknown task id, corrupt data files).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry
from ..config import get_settings
from ..core.state import AppState
from ..errors import ConfigError, NotFoundError, ParseError, UsageError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def run(argv: list[str], state: AppState) -> int:
    """Dispatch one command against an already-built state."""
    try:
        out = registry.handle(state, argv)
    except UsageError as e:
        print(str(e), file=sys.stderr)
        if e.usage:
            print(e.usage, file=sys.stderr)
        return 1
    except NotFoundError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1

    if out:
        print(out)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        settings = get_settings()
    except ConfigError as e:
        print(f"✗ Config error: {e}", file=sys.stderr)
        return 1

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    # log file lives next to the task document
    setup_logging(log_dir=Path(settings.tasks_file).parent, console_level=console_level)
    logger.debug("Starting %s argv=%s", settings.app_name, argv)

    try:
        state = create_initial_state(settings=settings)
        return run(argv, state)
    except ParseError:
        logger.exception("Corrupt data file")
        return 1


def heartbeat_main(argv: list[str] | None = None) -> int:
    """Entry point for the periodic heartbeat check (``nightly-heartbeat [--report]``)."""
    if argv is None:
        argv = sys.argv[1:]
    return main(["heartbeat-check", *argv])


if __name__ == "__main__":
    sys.exit(main())
