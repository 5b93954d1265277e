# src/nightly_build/errors.py

"""Exception types shared by the store, the repository and the CLI."""

from __future__ import annotations


class NightlyBuildError(Exception):
    """Base class for all errors raised by nightly_build."""


class UsageError(NightlyBuildError):
    """A command was invoked with missing or invalid arguments."""

    def __init__(self, message: str, usage: str | None = None) -> None:
        super().__init__(message)
        self.usage = usage


class NotFoundError(NightlyBuildError):
    """No task with the requested id exists."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class ParseError(NightlyBuildError):
    """The task document or a log line could not be decoded."""


class ConfigError(NightlyBuildError, ValueError):
    """The configuration file is unreadable or has the wrong shape."""
