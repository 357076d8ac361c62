# src/duesoon/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The engine depends on Protocols instead of concrete implementations.
This keeps the clock and the periodic trigger swappable and makes testing
deterministic (fake clock, manually fired timer).
"""

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Reminder, Task, TaskFilter

Clock = Callable[[], datetime]
# Returns the current local wall-clock time (naive datetime).

ReminderListener = Callable[["Reminder"], None]


class IntervalTimer(Protocol):
    """
    Periodic trigger port.

    start() schedules callback every interval_seconds (the first call happens
    after one interval; the engine runs the startup tick itself).
    stop() cancels it; after stop() returns no further callbacks may fire.
    """

    def start(self, callback: Callable[[], None], interval_seconds: float) -> None: ...
    def stop(self) -> None: ...


class TaskRepo(Protocol):
    # Mutators
    def create(self, text: str, due_at: datetime | None = None) -> Task | None: ...
    def toggle(self, task_id: int) -> Task | None: ...
    def delete(self, task_id: int) -> bool: ...
    def set_filter(self, task_filter: TaskFilter | str) -> bool: ...

    # Queries
    @property
    def filter(self) -> TaskFilter: ...
    def get(self, task_id: int) -> Task | None: ...
    def list_all(self) -> list[Task]: ...
    def view(self) -> list[Task]: ...
    def remaining_count(self) -> int: ...
    def count_tasks(self) -> int: ...
