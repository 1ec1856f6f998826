# src/task_tree/tasks/task_tree.py

"""
Unbalanced binary search tree of tasks keyed by task id.

Layout:
- module-level functions work on a subtree root and return the new root
  (the caller rebinds its own reference),
- TaskTree is the single owner object used by the rest of the app.

Ordering invariant: left subtree ids < node id <= right subtree ids.
Equal ids route right, so find() always returns the first occupant of an id.

All walks are iterative: the tree has no balance invariant and a sorted insert
sequence degenerates into a chain as long as the input.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .errors import DuplicateTaskIdError, EmptySubtreeError
from .formatting import format_row
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

RowEmitter = Callable[[str], None]


@dataclass(slots=True, eq=False)
class TaskTreeNode:
    task: Task
    left: TaskTreeNode | None = None
    right: TaskTreeNode | None = None

    @property
    def id(self) -> int:
        return self.task.id


# ---- functional core ----


def find_task(root: TaskTreeNode | None, task_id: int) -> Task | None:
    node = root
    while node is not None:
        if node.id == task_id:
            return node.task
        node = node.right if task_id > node.id else node.left
    return None


def _minimum_node(node: TaskTreeNode) -> TaskTreeNode:
    while node.left is not None:
        node = node.left
    return node


def find_minimum(subtree: TaskTreeNode | None) -> Task:
    """Task with the smallest id in `subtree` (its in-order first element)."""
    if subtree is None:
        raise EmptySubtreeError("find_minimum() needs a non-empty subtree")
    return _minimum_node(subtree).task


def insert_task(
    root: TaskTreeNode | None,
    task: Task,
    *,
    allow_duplicates: bool = False,
) -> TaskTreeNode:
    """
    Insert `task` and return the (possibly new) root.

    With allow_duplicates=False an id already on the search path raises
    DuplicateTaskIdError and the tree is left untouched.
    """
    new_node = TaskTreeNode(task)
    if root is None:
        return new_node

    node = root
    while True:
        if task.id == node.id and not allow_duplicates:
            raise DuplicateTaskIdError(task.id)

        if task.id < node.id:
            if node.left is None:
                node.left = new_node
                return root
            node = node.left
        else:
            if node.right is None:
                node.right = new_node
                return root
            node = node.right


def _delete(root: TaskTreeNode | None, task_id: int) -> tuple[TaskTreeNode | None, Task | None]:
    """Returns (new root, removed task or None)."""
    parent: TaskTreeNode | None = None
    node = root
    while node is not None and node.id != task_id:
        parent = node
        node = node.left if task_id < node.id else node.right

    if node is None:
        return root, None

    removed = node.task

    if node.left is not None and node.right is not None:
        # Two children: pull the in-order successor's payload up, then unlink
        # the successor (it has no left child by construction).
        succ_parent = node
        succ = node.right
        while succ.left is not None:
            succ_parent = succ
            succ = succ.left

        node.task = succ.task
        if succ_parent is node:
            succ_parent.right = succ.right
        else:
            succ_parent.left = succ.right
        succ.right = None
        return root, removed

    child = node.right if node.left is None else node.left
    node.left = node.right = None

    if parent is None:
        return child, removed
    if parent.left is node:
        parent.left = child
    else:
        parent.right = child
    return root, removed


def delete_task(root: TaskTreeNode | None, task_id: int) -> TaskTreeNode | None:
    """Remove one node with `task_id`; absent ids leave the tree unchanged."""
    new_root, _ = _delete(root, task_id)
    return new_root


def clear_tree(root: TaskTreeNode | None) -> int:
    """Post-order teardown; unlinks every node and returns how many were released."""
    # Two-stack walk: `order` ends up as reversed post-order (node, right, left).
    stack: list[TaskTreeNode] = [root] if root is not None else []
    order: list[TaskTreeNode] = []
    while stack:
        node = stack.pop()
        order.append(node)
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)

    released = 0
    while order:
        node = order.pop()
        node.left = node.right = None
        released += 1
    return released


def iter_in_order(root: TaskTreeNode | None) -> Iterator[Task]:
    stack: list[TaskTreeNode] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node.task
        node = node.right


def iter_pre_order(root: TaskTreeNode | None) -> Iterator[Task]:
    stack: list[TaskTreeNode] = [root] if root is not None else []
    while stack:
        node = stack.pop()
        yield node.task
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def tree_height(root: TaskTreeNode | None) -> int:
    height = 0
    level = [root] if root is not None else []
    while level:
        height += 1
        level = [c for n in level for c in (n.left, n.right) if c is not None]
    return height


def for_each_completed_in_order(root: TaskTreeNode | None, emit: RowEmitter = print) -> int:
    """Emit one row per completed task, ascending id. Returns the row count."""
    count = 0
    for task in iter_in_order(root):
        if task.status is TaskStatus.COMPLETED:
            emit(format_row(task))
            count += 1
    return count


# ---- owner object ----


class TaskTree:
    """
    Owner of the task BST.

    `version` increases on every structural or status change made through this
    object; ActiveTaskReport uses it to detect mutation while a report is in flight.
    """

    def __init__(self, *, allow_duplicates: bool = False) -> None:
        self.root: TaskTreeNode | None = None
        self.allow_duplicates = allow_duplicates
        self._size = 0
        self._version = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Task]:
        return iter_in_order(self.root)

    def __contains__(self, task_id: object) -> bool:
        return isinstance(task_id, int) and find_task(self.root, task_id) is not None

    @property
    def version(self) -> int:
        return self._version

    @property
    def is_empty(self) -> bool:
        return self.root is None

    def _touch(self) -> None:
        self._version += 1

    def insert(self, task: Task) -> None:
        self.root = insert_task(self.root, task, allow_duplicates=self.allow_duplicates)
        self._size += 1
        self._touch()
        logger.debug("Inserted task id=%s time_limit=%s status=%s", task.id, task.time_limit, task.status)

    def find(self, task_id: int) -> Task | None:
        return find_task(self.root, task_id)

    def find_minimum(self) -> Task:
        return find_minimum(self.root)

    def delete(self, task_id: int) -> Task | None:
        """Remove the task with `task_id`; returns the removed task or None if absent."""
        self.root, removed = _delete(self.root, task_id)
        if removed is None:
            logger.debug("Delete ignored: task id=%s not found", task_id)
            return None
        self._size -= 1
        self._touch()
        logger.debug("Deleted task id=%s", task_id)
        return removed

    def set_status(self, task_id: int, status: TaskStatus) -> Task | None:
        task = self.find(task_id)
        if task is None:
            return None
        if task.status is not status:
            task.status = status
            self._touch()
        return task

    def clear(self) -> int:
        released = clear_tree(self.root)
        self.root = None
        self._size = 0
        self._touch()
        logger.debug("Cleared task tree (%d nodes released)", released)
        return released

    def ids(self) -> list[int]:
        return [t.id for t in iter_in_order(self.root)]

    def pre_order(self) -> list[Task]:
        return list(iter_pre_order(self.root))

    def height(self) -> int:
        return tree_height(self.root)

    def for_each_completed_in_order(self, emit: RowEmitter = print) -> int:
        return for_each_completed_in_order(self.root, emit)

    def completed_rows(self) -> list[str]:
        rows: list[str] = []
        self.for_each_completed_in_order(rows.append)
        return rows
