# src/taskdesk/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Stored as the `completed` INTEGER column (0/1); deletion removes the row,
    so there is no status for it. The only transition is pending -> completed.
    """

    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def from_db(cls, raw: int | None) -> TaskStatus:
        return cls.COMPLETED if raw else cls.PENDING


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    owner_username: str
    title: str
    completed: bool = False

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.COMPLETED if self.completed else TaskStatus.PENDING
