# tests/test_commands.py

from __future__ import annotations

from task_tree.cli.commands import CommandRegistry, registry


def _row_ids(reply: str) -> list[int]:
    return [int(line.split("|")[1]) for line in reply.splitlines() if line.startswith("| ") and "ID" not in line]


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    notes: list[str] = []
    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_find_and_reports(state) -> None:
    assert registry.handle(state, "/add 1 10 active Write the report") == "Task 1 added."
    assert registry.handle(state, "/add 2 5 ativa Call Bob") == "Task 2 added."
    assert registry.handle(state, "/add 3 20 completed Pay rent") == "Task 3 added."
    assert state.dirty

    found = registry.handle(state, "/find 1") or ""
    assert "Write the report" in found
    assert registry.handle(state, "/find 42") == "Task 42 not found."

    assert _row_ids(registry.handle(state, "/active") or "") == [2, 1]
    assert _row_ids(registry.handle(state, "/completed") or "") == [3]
    assert _row_ids(registry.handle(state, "/list") or "") == [1, 2, 3]


def test_add_rejects_bad_input_and_duplicates(state) -> None:
    assert (registry.handle(state, "/add 1 10") or "").startswith("Usage:")
    assert (registry.handle(state, "/add x 10 active Thing") or "").startswith("Invalid task:")
    assert (registry.handle(state, "/add 1 10 active " + "y" * 21) or "").startswith("Invalid task:")

    registry.handle(state, "/add 1 10 active Thing")
    assert "already in the tree" in (registry.handle(state, "/add 1 3 active Other") or "")
    assert len(state.tree) == 1


def test_delete_complete_and_clear(state) -> None:
    for line in ("/add 2 5 active b", "/add 1 9 active a", "/add 3 1 active c"):
        registry.handle(state, line)

    assert registry.handle(state, "/complete 3") == "Task 3 is now Concluida."
    assert _row_ids(registry.handle(state, "/completed") or "") == [3]
    assert registry.handle(state, "/reactivate 3") == "Task 3 is now Ativa."

    assert registry.handle(state, "/delete 2") == "Task 2 deleted."
    assert registry.handle(state, "/rm 2") == "Task 2 not found."
    assert registry.handle(state, "/complete 2") == "Task 2 not found."
    assert state.tree.ids() == [1, 3]

    assert registry.handle(state, "/clear") == "Removed 2 tasks."
    assert registry.handle(state, "/active") == "No active tasks."
    assert registry.handle(state, "/completed") == "No completed tasks."
    assert registry.handle(state, "/list") == "The tree is empty."


def test_save_writes_snapshot(state) -> None:
    registry.handle(state, "/add 1 1 active a")
    registry.handle(state, "/add 2 2 completed b")
    notes: list[str] = []

    assert registry.handle(state, "/save", emit=notes.append) == "Saved 2 tasks."
    assert notes == ["[STORE] Saving..."]
    assert state.task_store.count_tasks() == 2
    assert not state.dirty


def test_status_and_help(state) -> None:
    registry.handle(state, "/add 1 1 active a")

    status = registry.handle(state, "/status") or ""
    assert "Tasks: 1 (height 1)" in status
    assert "Duplicate ids: rejected" in status

    help_text = registry.handle(state, "/help") or ""
    assert "/active" in help_text and "/delete" in help_text
