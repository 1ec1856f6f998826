# src/task_tree/tasks/errors.py

from __future__ import annotations


class TaskTreeError(Exception):
    """Base class for task tree errors."""


class TaskValidationError(TaskTreeError, ValueError):
    """Raised when caller-supplied task fields are invalid."""


class DuplicateTaskIdError(TaskTreeError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task id {task_id} is already in the tree.")
        self.task_id = task_id


class EmptySubtreeError(TaskTreeError):
    """find_minimum() was called on an empty subtree."""


class TreeMutatedError(TaskTreeError, RuntimeError):
    """The tree changed while a report over it was in flight."""
