# src/task_tree/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.active_report import ActiveTaskReport
from ..tasks.errors import DuplicateTaskIdError, TaskValidationError
from ..tasks.formatting import format_header, format_row
from ..tasks.task_models import DESCRIPTION_MAX_LEN, Task, TaskStatus
from .bootstrap import save_tree

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def _max_len(state: AppState) -> int:
    return int(getattr(state.settings, "description_max_len", DESCRIPTION_MAX_LEN))


def _table(rows: list[str], empty_text: str) -> str:
    if not rows:
        return empty_text
    return "\n".join([format_header(), *rows])


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    tree = state.tree
    dup = "allowed (shadowed)" if tree.allow_duplicates else "rejected"
    return (
        "Status:\n"
        f"  Tasks: {len(tree)} (height {tree.height()})\n"
        f"  Duplicate ids: {dup}\n"
        f"  Unsaved changes: {'yes' if state.dirty else 'no'}\n"
        f"  Snapshot: {getattr(state.settings, 'tasks_db_path', '?')}"
    )


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <id> <time_limit> <active|completed> <description...>
    """
    if len(args) < 4:
        return "Usage: /add <id> <time_limit> <active|completed> <description>"

    try:
        task = Task.create(
            args[0],
            " ".join(args[3:]),
            args[1],
            args[2],
            max_description_len=_max_len(state),
        )
    except TaskValidationError as e:
        return f"Invalid task: {e}"

    try:
        state.tree.insert(task)
    except DuplicateTaskIdError as e:
        return str(e)

    state.dirty = True
    logger.info("Task added id=%s", task.id)
    return f"Task {task.id} added."


def cmd_find(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /find <id>"
    task = state.tree.find(task_id)
    if task is None:
        return f"Task {task_id} not found."
    return _table([format_row(task)], "")


def cmd_delete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    if state.tree.delete(task_id) is None:
        return f"Task {task_id} not found."
    state.dirty = True
    logger.info("Task deleted id=%s", task_id)
    return f"Task {task_id} deleted."


def _set_status(state: AppState, args: list[str], status: TaskStatus, usage: str) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return usage
    task = state.tree.set_status(task_id, status)
    if task is None:
        return f"Task {task_id} not found."
    state.dirty = True
    return f"Task {task_id} is now {status.label}."


def cmd_complete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return _set_status(state, args, TaskStatus.COMPLETED, "Usage: /complete <id>")


def cmd_reactivate(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return _set_status(state, args, TaskStatus.ACTIVE, "Usage: /reactivate <id>")


def cmd_active(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    rows = ActiveTaskReport(state.tree).rows()
    return _table(rows, "No active tasks.")


def cmd_completed(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    rows = state.tree.completed_rows()
    return _table(rows, "No completed tasks.")


def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    rows = [format_row(t) for t in state.tree]
    return _table(rows, "The tree is empty.")


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    released = state.tree.clear()
    state.dirty = True
    return f"Removed {released} tasks."


def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("[STORE] Saving...")
    saved = save_tree(state)
    return f"Saved {saved} tasks."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show tree size, policy and snapshot path.")
registry.register(
    "add", cmd_add, help_text="Add a task: /add <id> <time_limit> <active|completed> <description>."
)
registry.register("find", cmd_find, help_text="Show one task: /find <id>.")
registry.register("delete", cmd_delete, help_text="Remove a task: /delete <id>.", aliases=["del", "rm"])
registry.register("complete", cmd_complete, help_text="Mark a task completed: /complete <id>.")
registry.register("reactivate", cmd_reactivate, help_text="Mark a task active again: /reactivate <id>.")
registry.register("active", cmd_active, help_text="Active tasks, nearest time limit first.")
registry.register("completed", cmd_completed, help_text="Completed tasks, ascending id.")
registry.register("list", cmd_list, help_text="All tasks, ascending id.", aliases=["ls"])
registry.register("clear", cmd_clear, help_text="Remove every task from the tree.")
registry.register("save", cmd_save, help_text="Write the tree to the snapshot store.")
