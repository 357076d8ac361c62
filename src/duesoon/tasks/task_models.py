# src/duesoon/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class TaskFilter(StrEnum):
    """
    View filter over the task list.

    Notes:
    - it is process-wide view state, never stored on tasks
    - applying a filter never reorders or mutates the collection
    """

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: object) -> TaskFilter | None:
        if not isinstance(raw, str) or not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None

    def matches(self, task: Task) -> bool:
        if self is TaskFilter.ACTIVE:
            return not task.completed
        if self is TaskFilter.COMPLETED:
            return task.completed
        return True


class ReminderKind(StrEnum):
    DUE_SOON = "due_soon"
    OVERDUE = "overdue"


class DedupPolicy(StrEnum):
    """
    How the reminder board decides that a reminder was already shown.

    - MESSAGE: compare message text against active reminders (legacy behavior)
    - TASK: key by (task_id, kind); a key fires once per task lifetime
    """

    MESSAGE = "message"
    TASK = "task"

    @classmethod
    def parse(cls, raw: str | None) -> DedupPolicy:
        if not raw:
            return cls.MESSAGE
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.MESSAGE


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    text: str
    created_at: datetime
    completed: bool = False
    due_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class Reminder:
    task_id: int
    kind: ReminderKind
    text: str
    created_at: datetime

    def key(self, policy: DedupPolicy) -> str | tuple[int, ReminderKind]:
        if policy is DedupPolicy.TASK:
            return (self.task_id, self.kind)
        return self.text
