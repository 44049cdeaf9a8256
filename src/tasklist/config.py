# src/tasklist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is read from disk except .env and the optional config_local.py.
- Paths default under a gitignored local data directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

STORAGE_BACKENDS = ("sqlite", "json")

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


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    storage_backend: str
    data_dir: Path
    tasks_db_path: Path
    tasks_json_path: Path

    # ---- Console ----
    confirm_delete: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasklist").strip() or "tasklist"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"

        # Validated later by bootstrap.open_task_store so a typo is reported, not ignored.
        storage_backend = _env(_k("STORAGE_BACKEND"), "sqlite").strip().lower() or "sqlite"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasklist"))
        tasks_db_path = _env_path(_k("DB_PATH"), data_dir / "tasks.sqlite3")
        tasks_json_path = _env_path(_k("JSON_PATH"), data_dir / "tasks.json")

        confirm_delete = _env_bool(_k("CONFIRM_DELETE"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            storage_backend=storage_backend,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            tasks_json_path=tasks_json_path,
            confirm_delete=confirm_delete,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore
except ImportError:
    _config_local = None

if _config_local is not None:
    if hasattr(_config_local, "STORAGE_BACKEND"):
        object.__setattr__(SETTINGS, "storage_backend", str(_config_local.STORAGE_BACKEND).lower())
    if hasattr(_config_local, "CONFIRM_DELETE"):
        object.__setattr__(SETTINGS, "confirm_delete", bool(_config_local.CONFIRM_DELETE))


def get_settings() -> Settings:
    return SETTINGS
