# src/duesoon/tasks/reminders.py

from __future__ import annotations

"""
Reminder evaluation.

evaluate_reminders() is a pure function of (tasks, now, seen keys): it
classifies every open task with a deadline and returns the reminders that are
not already active. ReminderBoard is the caller-side list of undismissed
reminders the results are appended to.
"""

import logging
import threading
from collections.abc import Hashable, Iterable
from datetime import datetime, timedelta

from .task_models import DedupPolicy, Reminder, ReminderKind, Task

logger = logging.getLogger(__name__)

DUE_SOON_WINDOW = timedelta(minutes=15)

_MESSAGES = {
    ReminderKind.DUE_SOON: 'Task "{text}" is due soon!',
    ReminderKind.OVERDUE: 'Task "{text}" is overdue!',
}


def reminder_text(task: Task, kind: ReminderKind) -> str:
    return _MESSAGES[kind].format(text=task.text)


def classify(
    task: Task,
    now: datetime,
    due_soon_window: timedelta = DUE_SOON_WINDOW,
) -> ReminderKind | None:
    """
    Classify one task against `now`.

    - completed tasks and tasks without due_at -> None
    - due_at < now                             -> OVERDUE
    - now <= due_at <= now + window            -> DUE_SOON
    - otherwise                                -> None
    """
    if task.completed or task.due_at is None:
        return None

    delta = task.due_at - now
    if delta < timedelta(0):
        return ReminderKind.OVERDUE
    if delta <= due_soon_window:
        return ReminderKind.DUE_SOON
    return None


def evaluate_reminders(
    tasks: Iterable[Task],
    now: datetime,
    *,
    seen: Iterable[Hashable] = (),
    dedup: DedupPolicy = DedupPolicy.MESSAGE,
    due_soon_window: timedelta = DUE_SOON_WINDOW,
) -> list[Reminder]:
    """
    Return reminders newly due at `now`.

    All tasks are classified against the same `now`. Due-soon reminders come
    first, then overdue ones, each in collection order. A reminder whose key
    (see Reminder.key) is in `seen`, or was already produced earlier in this
    batch, is dropped.
    """
    known = set(seen)
    due_soon: list[Reminder] = []
    overdue: list[Reminder] = []

    for task in tasks:
        kind = classify(task, now, due_soon_window)
        if kind is None:
            continue
        reminder = Reminder(
            task_id=task.id,
            kind=kind,
            text=reminder_text(task, kind),
            created_at=now,
        )
        (due_soon if kind is ReminderKind.DUE_SOON else overdue).append(reminder)

    out: list[Reminder] = []
    for reminder in due_soon + overdue:
        key = reminder.key(dedup)
        if key in known:
            continue
        known.add(key)
        out.append(reminder)
    return out


class ReminderBoard:
    """
    Active (undismissed) reminders, in arrival order.

    Reminders never expire on their own: completing or deleting the task does
    not remove them, only dismiss() does.

    With DedupPolicy.MESSAGE the seen keys are the texts of active reminders,
    so a dismissed reminder comes back on the next tick if its condition still
    holds. With DedupPolicy.TASK every (task_id, kind) ever shown stays seen
    until forget_task() is called.
    """

    def __init__(self, dedup: DedupPolicy = DedupPolicy.MESSAGE) -> None:
        self.dedup = dedup
        self._lock = threading.RLock()
        self._active: list[Reminder] = []
        self._notified: set[tuple[int, ReminderKind]] = set()

    def seen_keys(self) -> set[Hashable]:
        with self._lock:
            if self.dedup is DedupPolicy.TASK:
                return set(self._notified)
            return {r.key(self.dedup) for r in self._active}

    def extend(self, reminders: Iterable[Reminder]) -> list[Reminder]:
        """Append reminders not already seen; return the ones actually added."""
        added: list[Reminder] = []
        with self._lock:
            seen = self.seen_keys()
            for reminder in reminders:
                key = reminder.key(self.dedup)
                if key in seen:
                    continue
                seen.add(key)
                self._notified.add((reminder.task_id, reminder.kind))
                self._active.append(reminder)
                added.append(reminder)
        return added

    def dismiss(self, index: int) -> Reminder | None:
        with self._lock:
            if index < 0 or index >= len(self._active):
                logger.debug("dismiss skipped: index %s out of range", index)
                return None
            return self._active.pop(index)

    def forget_task(self, task_id: int) -> None:
        with self._lock:
            self._notified = {k for k in self._notified if k[0] != task_id}

    def active(self) -> list[Reminder]:
        with self._lock:
            return list(self._active)

    def messages(self) -> list[str]:
        with self._lock:
            return [r.text for r in self._active]

    def __len__(self) -> int:
        with self._lock:
            return len(self._active)
