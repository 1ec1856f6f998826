# src/task_tree/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the CLI layer.

The composition root depends on Protocols instead of concrete implementations,
so the SQLite store can be swapped for a fake in tests.
"""

from typing import Iterable, Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """Snapshot persistence for the task tree."""

    def load_tasks(self) -> list[Task]: ...
    def save_tasks(self, tasks: Iterable[Task]) -> int: ...
    def count_tasks(self) -> int: ...
