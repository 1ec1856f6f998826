# src/task_tree/tasks/active_report.py

"""
Active task report: collect -> sort -> emit & discard.

The report borrows Task references from the tree and never mutates or removes
them. Its own entries live only until the rows have been emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from operator import attrgetter

from .errors import TreeMutatedError
from .formatting import format_row
from .task_models import Task, TaskStatus
from .task_tree import RowEmitter, TaskTree, TaskTreeNode, iter_pre_order

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class ActiveTaskEntry:
    """Non-owning reference to a task in the tree plus the link to the next entry."""

    task: Task | None
    next: ActiveTaskEntry | None = None


def iter_entries(head: ActiveTaskEntry | None) -> Iterator[ActiveTaskEntry]:
    entry = head
    while entry is not None:
        yield entry
        entry = entry.next


def iter_tasks(head: ActiveTaskEntry | None) -> Iterator[Task]:
    for entry in iter_entries(head):
        if entry.task is not None:
            yield entry.task


def collect_active(root: TaskTreeNode | None) -> ActiveTaskEntry | None:
    """Pre-order walk appending every active task at the tail, in discovery order."""
    head: ActiveTaskEntry | None = None
    tail: ActiveTaskEntry | None = None
    for task in iter_pre_order(root):
        if task.status is not TaskStatus.ACTIVE:
            continue
        entry = ActiveTaskEntry(task)
        if tail is None:
            head = entry
        else:
            tail.next = entry
        tail = entry
    return head


def sort_entries(head: ActiveTaskEntry | None) -> ActiveTaskEntry | None:
    """
    Order entries by time_limit ascending.

    Entries keep their positions; the borrowed task references are rewritten
    in sorted order. Order among equal time limits is not guaranteed.
    """
    entries = list(iter_entries(head))
    ordered = sorted((e.task for e in entries), key=attrgetter("time_limit"))
    for entry, task in zip(entries, ordered):
        entry.task = task
    return head


def discard_entries(head: ActiveTaskEntry | None) -> int:
    """Drop every entry (never the tasks they point at). Returns the entry count."""
    count = 0
    entry = head
    while entry is not None:
        nxt = entry.next
        entry.task = None
        entry.next = None
        entry = nxt
        count += 1
    return count


def build_and_print(root: TaskTreeNode | None, emit: RowEmitter = print) -> int:
    """Emit one row per active task under `root`, ascending time limit."""
    head = sort_entries(collect_active(root))
    try:
        count = 0
        for task in iter_tasks(head):
            emit(format_row(task))
            count += 1
        return count
    finally:
        discard_entries(head)


class ActiveTaskReport:
    """
    One-shot report over a TaskTree.

    collect() records the tree version; emit() refuses to run if the tree was
    modified in between (TreeMutatedError).
    """

    def __init__(self, tree: TaskTree) -> None:
        self._tree = tree
        self._head: ActiveTaskEntry | None = None
        self._version: int | None = None

    def __iter__(self) -> Iterator[Task]:
        yield from iter_tasks(self._head)

    def __len__(self) -> int:
        return sum(1 for _ in iter_entries(self._head))

    def collect(self) -> ActiveTaskReport:
        self.discard()
        self._version = self._tree.version
        self._head = collect_active(self._tree.root)
        return self

    def sort(self) -> ActiveTaskReport:
        self._check_unchanged()
        self._head = sort_entries(self._head)
        return self

    def emit(self, emit: RowEmitter = print) -> int:
        self._check_unchanged()
        try:
            count = 0
            for task in self:
                emit(format_row(task))
                count += 1
        finally:
            self.discard()
        logger.debug("Active report emitted %d rows", count)
        return count

    def discard(self) -> None:
        discard_entries(self._head)
        self._head = None
        self._version = None

    def build_and_print(self, emit: RowEmitter = print) -> int:
        return self.collect().sort().emit(emit)

    def rows(self) -> list[str]:
        out: list[str] = []
        self.build_and_print(out.append)
        return out

    def _check_unchanged(self) -> None:
        if self._version is None:
            return
        if self._tree.version != self._version:
            self.discard()
            raise TreeMutatedError("Task tree was modified while the active report was in flight.")
