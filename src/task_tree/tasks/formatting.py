# src/task_tree/tasks/formatting.py

from __future__ import annotations

from .task_models import Task

ROW_TEMPLATE = "| {id:<5} | {description:<20} | {time_limit:<16} | {label:<9}|"


def format_row(task: Task) -> str:
    """One fixed-width report row; the last column is the status label."""
    return ROW_TEMPLATE.format(
        id=task.id,
        description=task.description,
        time_limit=task.time_limit,
        label=task.status.label,
    )


def format_header() -> str:
    head = ROW_TEMPLATE.format(id="ID", description="Descricao", time_limit="Prazo", label="Status")
    rule = "-" * len(head)
    return f"{rule}\n{head}\n{rule}"
