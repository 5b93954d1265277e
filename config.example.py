# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file)
and from an optional JSON config file (see config.example.json). Environment variables win.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "NIGHTLY_APP_NAME": "App display name (default: nightly-build).",
    "NIGHTLY_LOG_LEVEL": "Console logging level (default: WARNING; the log file always gets DEBUG).",
    # Paths
    "NIGHTLY_CONFIG_FILE": "JSON config file path (default: config.json; missing file is fine).",
    "NIGHTLY_DATA_DIR": "Local data directory for the default tasks and log files (default: data).",
    "NIGHTLY_TASKS_FILE": "Task document path; nightly-build.log is written beside it (default: storage.tasksFile or <data_dir>/tasks.json).",
    "NIGHTLY_LOGS_FILE": "Activity log path (default: storage.logsFile or <data_dir>/activity.log).",
    # Anti-slacking
    "NIGHTLY_ANTI_SLACKING_ENABLED": "Enable idle-heartbeat detection (true/false, default: true).",
    "NIGHTLY_MAX_IDLE_HEARTBEATS": "Idle heartbeats in 24h that trigger the warning (default: 3).",
}
