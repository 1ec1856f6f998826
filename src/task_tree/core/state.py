# src/task_tree/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_tree import TaskTree
from .ports import TaskRepo


@dataclass
class AppState:
    # Settings live on the state so commands can read them without global lookups.
    settings: object

    tree: TaskTree
    task_store: TaskRepo

    # Set by mutating commands, cleared after a successful save.
    dirty: bool = False
