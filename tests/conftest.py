# tests/conftest.py

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tree.core.state import AppState
from task_tree.tasks.task_models import Task, TaskStatus
from task_tree.tasks.task_store import TaskStore
from task_tree.tasks.task_tree import TaskTree

TaskSpec = tuple[int, str, int, TaskStatus]


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    A SimpleNamespace rather than the real config keeps tests isolated from
    the environment and any local .env file.
    """
    return SimpleNamespace(
        app_name="task-tree-test",
        log_level="DEBUG",
        console_enabled=False,
        allow_duplicate_ids=False,
        description_max_len=20,
        autosave=True,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState with an empty tree and a real SQLite store under tmp_path."""
    return AppState(
        settings=settings,
        tree=TaskTree(allow_duplicates=settings.allow_duplicate_ids),
        task_store=TaskStore(settings.tasks_db_path),
    )


@pytest.fixture()
def make_tree() -> Callable[..., TaskTree]:
    """Factory: build a TaskTree from (id, description, time_limit, status) tuples."""

    def _make(specs: Iterable[TaskSpec], *, allow_duplicates: bool = False) -> TaskTree:
        tree = TaskTree(allow_duplicates=allow_duplicates)
        for task_id, description, time_limit, status in specs:
            tree.insert(Task(task_id, description, time_limit, status))
        return tree

    return _make
