# src/nightly_build/config.py

"""Centralized settings loaded from environment variables (+ optional .env and config.json).

Precedence (highest first):
- NIGHTLY_* environment variables (a local .env is loaded without overriding the real env),
- the JSON config file ({"storage": {...}, "antiSlacking": {...}}),
- built-in defaults.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .errors import ConfigError

ENV_PREFIX = "NIGHTLY"

DEFAULT_MAX_IDLE_HEARTBEATS = 3

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _section(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    val = data.get(name, {})
    if not isinstance(val, dict):
        raise ConfigError(f"{path}: '{name}' must be an object")
    return val


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Read the JSON config file. A missing file is an empty config.

    Shape:
        {"storage": {"tasksFile": str, "logsFile": str},
         "antiSlacking": {"enabled": bool, "maxIdleHeartbeats": int}}
    """
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text("utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"{path}: cannot read config: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: config must be a JSON object")

    storage = _section(data, "storage", path)
    for key in ("tasksFile", "logsFile"):
        if key in storage and not isinstance(storage[key], str):
            raise ConfigError(f"{path}: storage.{key} must be a string")

    anti = _section(data, "antiSlacking", path)
    if "enabled" in anti and not isinstance(anti["enabled"], bool):
        raise ConfigError(f"{path}: antiSlacking.enabled must be a boolean")
    max_idle = anti.get("maxIdleHeartbeats")
    if max_idle is not None and (
        isinstance(max_idle, bool) or not isinstance(max_idle, int) or max_idle < 1
    ):
        raise ConfigError(f"{path}: antiSlacking.maxIdleHeartbeats must be a positive integer")

    return data


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    config_file: Path
    data_dir: Path
    tasks_file: Path
    logs_file: Path

    # ---- Anti-slacking ----
    anti_slacking_enabled: bool
    max_idle_heartbeats: int

    @staticmethod
    def from_env() -> "Settings":
        config_file = _env_path(_k("CONFIG_FILE"), Path("config.json"))
        file_cfg = load_config_file(config_file)
        storage = file_cfg.get("storage", {})
        anti = file_cfg.get("antiSlacking", {})

        app_name = _env(_k("APP_NAME"), "nightly-build") or "nightly-build"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path("data"))

        tasks_default = Path(storage["tasksFile"]) if "tasksFile" in storage else data_dir / "tasks.json"
        logs_default = Path(storage["logsFile"]) if "logsFile" in storage else data_dir / "activity.log"
        tasks_file = _env_path(_k("TASKS_FILE"), tasks_default)
        logs_file = _env_path(_k("LOGS_FILE"), logs_default)

        anti_slacking_enabled = _env_bool(_k("ANTI_SLACKING_ENABLED"), anti.get("enabled", True))
        max_idle_heartbeats = _env_int(
            _k("MAX_IDLE_HEARTBEATS"),
            anti.get("maxIdleHeartbeats", DEFAULT_MAX_IDLE_HEARTBEATS),
        )

        return Settings(
            app_name=app_name,
            log_level=log_level,
            config_file=config_file,
            data_dir=data_dir,
            tasks_file=tasks_file,
            logs_file=logs_file,
            anti_slacking_enabled=anti_slacking_enabled,
            max_idle_heartbeats=max(1, max_idle_heartbeats),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Settings are read once per process, on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
