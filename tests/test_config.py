# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from task_tree.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "TASKTREE_DATA_DIR",
        "TASKTREE_TASKS_DB_PATH",
        "TASKTREE_ALLOW_DUPLICATE_IDS",
        "TASKTREE_DESCRIPTION_MAX_LEN",
        "TASKTREE_AUTOSAVE",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.allow_duplicate_ids is False
    assert s.description_max_len == 20
    assert s.autosave is True
    assert s.tasks_db_path == s.data_dir / "tasks.sqlite3"


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKTREE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKTREE_ALLOW_DUPLICATE_IDS", "yes")
    monkeypatch.setenv("TASKTREE_DESCRIPTION_MAX_LEN", "not-a-number")
    monkeypatch.setenv("TASKTREE_AUTOSAVE", "off")
    monkeypatch.delenv("TASKTREE_TASKS_DB_PATH", raising=False)

    s = Settings.from_env()

    assert s.data_dir == tmp_path
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.allow_duplicate_ids is True
    assert s.description_max_len == 20
    assert s.autosave is False
