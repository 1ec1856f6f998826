# src/task_tree/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the task tree and its SQLite snapshot store into AppState,
- rebuilds the tree from the snapshot and writes it back on shutdown.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.errors import DuplicateTaskIdError
from ..tasks.task_store import TaskStore
from ..tasks.task_tree import TaskTree

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(
        settings=settings,
        tree=TaskTree(allow_duplicates=settings.allow_duplicate_ids),
        task_store=TaskStore(
            settings.tasks_db_path,
            max_description_len=settings.description_max_len,
        ),
    )


def load_tree(state: AppState) -> int:
    """Insert every stored task into the (normally empty) tree. Returns how many went in."""
    loaded = 0
    for task in state.task_store.load_tasks():
        try:
            state.tree.insert(task)
        except DuplicateTaskIdError:
            logger.warning("Skipping stored task with duplicate id=%s", task.id)
            continue
        loaded += 1
    state.dirty = False
    logger.info("Loaded %d tasks into the tree", loaded)
    return loaded


def save_tree(state: AppState) -> int:
    """Snapshot the tree in pre-order so that reloading rebuilds the same shape."""
    saved = state.task_store.save_tasks(state.tree.pre_order())
    state.dirty = False
    return saved
