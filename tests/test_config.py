# tests/test_config.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from nightly_build.config import Settings
from nightly_build.errors import ConfigError

_VARS = (
    "NIGHTLY_CONFIG_FILE",
    "NIGHTLY_DATA_DIR",
    "NIGHTLY_TASKS_FILE",
    "NIGHTLY_LOGS_FILE",
    "NIGHTLY_ANTI_SLACKING_ENABLED",
    "NIGHTLY_MAX_IDLE_HEARTBEATS",
    "NIGHTLY_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults_without_config_file() -> None:
    s = Settings.from_env()

    assert s.data_dir == Path("data")
    assert s.tasks_file == Path("data") / "tasks.json"
    assert s.logs_file == Path("data") / "activity.log"
    assert s.anti_slacking_enabled is True
    assert s.max_idle_heartbeats == 3
    assert s.log_level == "WARNING"


def test_config_file_values(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text(
        json.dumps(
            {
                "storage": {"tasksFile": "store/t.json", "logsFile": "store/a.log"},
                "antiSlacking": {"enabled": False, "maxIdleHeartbeats": 7},
            }
        ),
        "utf-8",
    )

    s = Settings.from_env()

    assert s.tasks_file == Path("store/t.json")
    assert s.logs_file == Path("store/a.log")
    assert s.anti_slacking_enabled is False
    assert s.max_idle_heartbeats == 7


def test_env_overrides_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = tmp_path / "custom.json"
    cfg.write_text(json.dumps({"antiSlacking": {"enabled": False, "maxIdleHeartbeats": 7}}), "utf-8")
    monkeypatch.setenv("NIGHTLY_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("NIGHTLY_ANTI_SLACKING_ENABLED", "yes")
    monkeypatch.setenv("NIGHTLY_MAX_IDLE_HEARTBEATS", "2")
    monkeypatch.setenv("NIGHTLY_TASKS_FILE", str(tmp_path / "x.json"))

    s = Settings.from_env()

    assert s.config_file == cfg
    assert s.anti_slacking_enabled is True
    assert s.max_idle_heartbeats == 2
    assert s.tasks_file == tmp_path / "x.json"


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[]",
        '{"storage": []}',
        '{"storage": {"tasksFile": 3}}',
        '{"antiSlacking": {"enabled": "yes"}}',
        '{"antiSlacking": {"maxIdleHeartbeats": 0}}',
    ],
)
def test_invalid_config_file(tmp_path: Path, content: str) -> None:
    (tmp_path / "config.json").write_text(content, "utf-8")
    with pytest.raises(ConfigError):
        Settings.from_env()
