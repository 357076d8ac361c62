# src/duesoon/tasks/task_store.py

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import replace
from datetime import datetime

from ..core.ports import Clock
from .task_models import Task, TaskFilter

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory ordered task store.

    - insertion order is display order
    - ids come from a monotonic counter and are never reused, even after delete
    - unknown ids are no-ops, never errors

    Thread-safety:
    - one lock covers every read and mutation, so a background reminder tick
      always sees a consistent snapshot
    """

    def __init__(self, clock: Clock = datetime.now) -> None:
        self._clock = clock
        self._lock = threading.RLock()
        self._tasks: list[Task] = []
        self._ids = itertools.count(1)
        self._filter = TaskFilter.ALL
        logger.info("TaskStore ready")

    # ---- mutations ----

    def create(self, text: str, due_at: datetime | None = None) -> Task | None:
        if not text or not text.strip():
            logger.debug("create skipped: empty text")
            return None

        with self._lock:
            task = Task(
                id=next(self._ids),
                text=text,
                created_at=self._clock(),
                completed=False,
                due_at=due_at,
            )
            self._tasks.append(task)

        logger.info("Task %s created due_at=%s", task.id, task.due_at)
        return task

    def toggle(self, task_id: int) -> Task | None:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                logger.debug("toggle skipped: task %s not found", task_id)
                return None
            task = replace(self._tasks[idx], completed=not self._tasks[idx].completed)
            self._tasks[idx] = task

        logger.info("Task %s -> %s", task.id, "completed" if task.completed else "active")
        return task

    def delete(self, task_id: int) -> bool:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                logger.debug("delete skipped: task %s not found", task_id)
                return False
            del self._tasks[idx]

        logger.info("Task %s deleted", task_id)
        return True

    def set_filter(self, task_filter: TaskFilter | str) -> bool:
        parsed = TaskFilter.parse(task_filter)
        if parsed is None:
            logger.debug("set_filter skipped: unknown filter %r", task_filter)
            return False
        with self._lock:
            self._filter = parsed
        logger.debug("Filter -> %s", parsed.value)
        return True

    # ---- queries ----

    @property
    def filter(self) -> TaskFilter:
        return self._filter

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            idx = self._index_of(task_id)
            return None if idx is None else self._tasks[idx]

    def list_all(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def view(self) -> list[Task]:
        with self._lock:
            return [t for t in self._tasks if self._filter.matches(t)]

    def remaining_count(self) -> int:
        with self._lock:
            return sum(1 for t in self._tasks if not t.completed)

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def _index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None
