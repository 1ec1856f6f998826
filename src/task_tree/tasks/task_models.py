# src/task_tree/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .errors import TaskValidationError

DESCRIPTION_MAX_LEN = 20


class TaskStatus(StrEnum):
    """
    Task completion status.

    Notes:
    - the stored/legacy encoding is an int code: 1 = active, 0 = completed
    - `label` is the text shown in the report column
    """

    ACTIVE = "active"
    COMPLETED = "completed"

    @property
    def code(self) -> int:
        return 1 if self is TaskStatus.ACTIVE else 0

    @property
    def label(self) -> str:
        return "Ativa" if self is TaskStatus.ACTIVE else "Concluida"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus:
        """Accept an enum member, its value, its label or the legacy int code."""
        if isinstance(raw, TaskStatus):
            return raw
        if isinstance(raw, bool):
            raise TaskValidationError(f"Invalid task status: {raw!r}")
        if isinstance(raw, int):
            if raw == 1:
                return cls.ACTIVE
            if raw == 0:
                return cls.COMPLETED
            raise TaskValidationError(f"Invalid task status code: {raw!r}")

        text = str(raw or "").strip().lower()
        aliases = {
            "active": cls.ACTIVE,
            "ativa": cls.ACTIVE,
            "1": cls.ACTIVE,
            "completed": cls.COMPLETED,
            "concluida": cls.COMPLETED,
            "done": cls.COMPLETED,
            "0": cls.COMPLETED,
        }
        try:
            return aliases[text]
        except KeyError:
            raise TaskValidationError(f"Invalid task status: {raw!r}") from None


def _as_int(name: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise TaskValidationError(f"{name} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise TaskValidationError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(slots=True)
class Task:
    id: int
    description: str
    time_limit: int
    status: TaskStatus = TaskStatus.ACTIVE

    def __post_init__(self) -> None:
        self.status = TaskStatus.parse(self.status)

    @property
    def is_active(self) -> bool:
        return self.status is TaskStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED

    @classmethod
    def create(
        cls,
        id: Any,
        description: Any,
        time_limit: Any,
        status: Any = TaskStatus.ACTIVE,
        *,
        max_description_len: int = DESCRIPTION_MAX_LEN,
    ) -> Task:
        """
        Validating factory for caller input (CLI arguments, stored rows).

        Raises TaskValidationError on bad fields.
        """
        text = str(description if description is not None else "").strip()
        if not text:
            raise TaskValidationError("description must not be empty")
        if len(text) > max_description_len:
            raise TaskValidationError(
                f"description is longer than {max_description_len} characters: {text!r}"
            )

        return cls(
            id=_as_int("id", id),
            description=text,
            time_limit=_as_int("time_limit", time_limit),
            status=TaskStatus.parse(status),
        )
