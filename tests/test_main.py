# tests/test_main.py

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from nightly_build import config
from nightly_build.cli.main import heartbeat_main, main


@pytest.fixture()
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NIGHTLY_CONFIG_FILE", str(tmp_path / "missing.json"))
    monkeypatch.setenv("NIGHTLY_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("NIGHTLY_TASKS_FILE", raising=False)
    monkeypatch.delenv("NIGHTLY_LOGS_FILE", raising=False)
    monkeypatch.delenv("NIGHTLY_APP_NAME", raising=False)
    monkeypatch.setattr(config, "_SETTINGS", None)

    # setup_logging replaces root handlers; put them back afterwards.
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    yield tmp_path / "data"
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved[0]:
        root.addHandler(h)
    root.setLevel(saved[1])
    logging.captureWarnings(False)


def test_main_runs_one_command_per_process(cli_env: Path, capsys) -> None:
    assert main(["add", "From the CLI", "--priority=low"]) == 0
    capsys.readouterr()

    records = json.loads((cli_env / "tasks.json").read_text("utf-8"))
    assert [r["title"] for r in records] == ["From the CLI"]
    assert (cli_env / "nightly-build.log").exists()

    assert main(["complete", records[0]["id"], "ok"]) == 0
    assert main(["complete", "nope"]) == 1


def test_heartbeat_main_logs_check(cli_env: Path, capsys) -> None:
    assert heartbeat_main([]) == 0
    assert "Heartbeat Check" in capsys.readouterr().out

    (line,) = (cli_env / "activity.log").read_text("utf-8").splitlines()
    assert json.loads(line)["activity"] == "heartbeat_check_completed"


def test_corrupt_task_document_exits_1(cli_env: Path) -> None:
    cli_env.mkdir(parents=True, exist_ok=True)
    (cli_env / "tasks.json").write_text("{oops", "utf-8")

    assert main(["list"]) == 1


def test_bad_config_exits_1(cli_env: Path, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("[]", "utf-8")
    monkeypatch.setenv("NIGHTLY_CONFIG_FILE", str(bad))

    assert main(["list"]) == 1
    assert "Config error" in capsys.readouterr().err


def test_log_file_sits_next_to_configured_tasks_file(
    cli_env: Path, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys
) -> None:
    cfg = tmp_path / "config.json"
    elsewhere = tmp_path / "elsewhere"
    cfg.write_text(json.dumps({"storage": {"tasksFile": str(elsewhere / "tasks.json")}}), "utf-8")
    monkeypatch.setenv("NIGHTLY_CONFIG_FILE", str(cfg))

    assert main(["list"]) == 0
    capsys.readouterr()

    log_file = elsewhere / "nightly-build.log"
    assert log_file.exists()
    assert not (cli_env / "nightly-build.log").exists()
    assert "Starting nightly-build" in log_file.read_text("utf-8")
