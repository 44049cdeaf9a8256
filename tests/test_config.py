# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.config import Settings

_VARS = (
    "TASKLIST_APP_NAME",
    "TASKLIST_LOG_LEVEL",
    "TASKLIST_STORAGE_BACKEND",
    "TASKLIST_DATA_DIR",
    "TASKLIST_DB_PATH",
    "TASKLIST_JSON_PATH",
    "TASKLIST_CONFIRM_DELETE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()

    assert s.app_name == "tasklist"
    assert s.log_level == "WARNING"
    assert s.storage_backend == "sqlite"
    assert s.data_dir == Path(".local/tasklist")
    assert s.tasks_db_path == Path(".local/tasklist/tasks.sqlite3")
    assert s.tasks_json_path == Path(".local/tasklist/tasks.json")
    assert s.confirm_delete is True


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKLIST_APP_NAME", "chores")
    monkeypatch.setenv("TASKLIST_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASKLIST_STORAGE_BACKEND", " JSON ")
    monkeypatch.setenv("TASKLIST_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKLIST_CONFIRM_DELETE", "no")

    s = Settings.from_env()

    assert s.app_name == "chores"
    assert s.log_level == "DEBUG"
    assert s.storage_backend == "json"
    # Paths follow the data dir unless set explicitly.
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.tasks_json_path == tmp_path / "tasks.json"
    assert s.confirm_delete is False


def test_explicit_paths_win(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKLIST_DB_PATH", str(tmp_path / "a.db"))
    monkeypatch.setenv("TASKLIST_JSON_PATH", str(tmp_path / "b.json"))

    s = Settings.from_env()

    assert s.tasks_db_path == tmp_path / "a.db"
    assert s.tasks_json_path == tmp_path / "b.json"


@pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("ON", True), ("0", False), ("", True)])
def test_confirm_delete_parsing(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("TASKLIST_CONFIRM_DELETE", raw)
    assert Settings.from_env().confirm_delete is expected


def test_settings_are_frozen() -> None:
    s = Settings.from_env()
    with pytest.raises(AttributeError):
        s.app_name = "other"  # type: ignore[misc]
