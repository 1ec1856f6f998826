# tests/test_bootstrap.py

from __future__ import annotations

import pytest

from task_tree.cli.bootstrap import create_initial_state, load_tree, save_tree
from task_tree.cli.main import _shutdown
from task_tree.connectors.console_connector import run_console_loop
from task_tree.tasks import task_tree as tree_module
from task_tree.tasks.task_models import Task, TaskStatus


def test_create_initial_state_uses_settings(settings) -> None:
    settings.allow_duplicate_ids = True
    state = create_initial_state(settings=settings)

    assert state.tree.allow_duplicates
    assert state.tree.is_empty
    assert settings.tasks_db_path.exists()


def test_save_then_load_roundtrip(state, settings) -> None:
    for task_id in (4, 2, 6):
        state.tree.insert(Task(task_id, f"t{task_id}", task_id, TaskStatus.ACTIVE))
    assert save_tree(state) == 3

    fresh = create_initial_state(settings=settings)
    assert load_tree(fresh) == 3
    assert fresh.tree.ids() == [2, 4, 6]
    assert fresh.tree.root is not None and fresh.tree.root.id == 4
    assert not fresh.dirty


def test_load_skips_duplicate_ids(state) -> None:
    state.task_store.save_tasks([Task(1, "first", 1), Task(1, "again", 2)])

    assert load_tree(state) == 1
    assert state.tree.find(1).description == "first"


def test_shutdown_saves_only_when_dirty(state) -> None:
    state.tree.insert(Task(1, "a", 1))
    _shutdown(state)
    assert state.task_store.count_tasks() == 0
    assert state.tree.is_empty

    state.tree.insert(Task(2, "b", 1))
    state.dirty = True
    _shutdown(state)
    assert [t.id for t in state.task_store.load_tasks()] == [2]


def test_shutdown_respects_autosave_off(state, settings) -> None:
    settings.autosave = False
    state.tree.insert(Task(1, "a", 1))
    state.dirty = True

    _shutdown(state)

    assert state.task_store.count_tasks() == 0


def test_console_loop_dispatches_commands(state, capsys) -> None:
    lines = iter(["/add 1 10 active Write report", "", "add 2 3 active Call", "/active", "/exit", "/list"])

    run_console_loop(state, read_line=lambda _prompt: next(lines))

    out = capsys.readouterr().out
    assert "Task 1 added." in out
    assert "Task 2 added." in out
    assert out.index("| 2 ") < out.index("| 1 ")
    # /exit stops the loop before /list is read.
    assert next(lines) == "/list"


def test_console_loop_stops_on_eof(state) -> None:
    def read_line(_prompt: str) -> str:
        raise EOFError

    run_console_loop(state, read_line=read_line)


def test_console_loop_lets_memory_error_escape(state, monkeypatch) -> None:
    def out_of_memory(*args, **kwargs):
        raise MemoryError

    monkeypatch.setattr(tree_module, "insert_task", out_of_memory)
    lines = iter(["/add 1 10 active a", "/list", "/exit"])

    with pytest.raises(MemoryError):
        run_console_loop(state, read_line=lambda _prompt: next(lines))

    # The loop stopped at the failing command; /list was never read.
    assert next(lines) == "/list"
    assert state.tree.is_empty
