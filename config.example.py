# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Storage
    "TASKLIST_STORAGE_BACKEND": "Where tasks are kept: sqlite (default) or json.",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data directory, also holds tasklist.log (default: .local/tasklist).",
    "TASKLIST_DB_PATH": "SQLite database path (default: <data_dir>/tasks.sqlite3).",
    "TASKLIST_JSON_PATH": "JSON document path (default: <data_dir>/tasks.json).",
    # Console
    "TASKLIST_CONFIRM_DELETE": "Ask before deleting a task (true/false, default: true).",
}
