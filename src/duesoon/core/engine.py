# src/duesoon/core/engine.py

"""
Task engine.

Owns the task store, the active reminder board, the clock and the periodic
timer. Connectors call the input events (create/toggle/delete/set_filter/
dismiss_reminder) and read the outputs (view/remaining_count/reminders);
the timer calls tick().
"""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Iterator
from datetime import datetime, timedelta

from ..tasks.due_dates import parse_due_date
from ..tasks.reminders import DUE_SOON_WINDOW, ReminderBoard, evaluate_reminders
from ..tasks.task_models import DedupPolicy, Reminder, Task, TaskFilter
from ..tasks.task_store import TaskStore
from .ports import Clock, IntervalTimer, ReminderListener, TaskRepo

logger = logging.getLogger(__name__)


class TaskEngine:
    def __init__(
        self,
        *,
        clock: Clock = datetime.now,
        store: TaskRepo | None = None,
        dedup: DedupPolicy = DedupPolicy.MESSAGE,
        due_soon_window: timedelta = DUE_SOON_WINDOW,
        check_interval_seconds: float = 60.0,
    ) -> None:
        self.clock = clock
        self.store: TaskRepo = store if store is not None else TaskStore(clock=clock)
        self.board = ReminderBoard(dedup=dedup)
        self.due_soon_window = due_soon_window
        self.check_interval_seconds = check_interval_seconds

        self._listeners: list[ReminderListener] = []
        self._timer: IntervalTimer | None = None
        self._running = False
        # Serializes ticks against start/stop so no tick runs after stop().
        self._tick_lock = threading.Lock()

    # ---- input events ----

    def create(self, text: str, due_raw: str | None = None) -> Task | None:
        return self.store.create(text, parse_due_date(due_raw))

    def create_at(self, text: str, due_at: datetime | None = None) -> Task | None:
        return self.store.create(text, due_at)

    def toggle(self, task_id: int) -> Task | None:
        return self.store.toggle(task_id)

    def delete(self, task_id: int) -> bool:
        deleted = self.store.delete(task_id)
        if deleted:
            self.board.forget_task(task_id)
        return deleted

    def set_filter(self, task_filter: TaskFilter | str) -> bool:
        return self.store.set_filter(task_filter)

    def dismiss_reminder(self, index: int) -> Reminder | None:
        reminder = self.board.dismiss(index)
        if reminder is not None:
            logger.info("Reminder dismissed: %s", reminder.text)
        return reminder

    # ---- outputs ----

    @property
    def filter(self) -> TaskFilter:
        return self.store.filter

    def view(self) -> list[Task]:
        return self.store.view()

    def remaining_count(self) -> int:
        return self.store.remaining_count()

    def reminders(self) -> list[str]:
        return self.board.messages()

    def add_listener(self, listener: ReminderListener) -> None:
        self._listeners.append(listener)

    # ---- evaluation ----

    def tick(self) -> list[Reminder]:
        """
        Run one evaluation against a single captured `now`.

        Returns the reminders appended to the board by this tick.
        """
        with self._tick_lock:
            return self._tick_locked()

    def _tick_locked(self) -> list[Reminder]:
        now = self.clock()
        tasks = self.store.list_all()
        candidates = evaluate_reminders(
            tasks,
            now,
            seen=self.board.seen_keys(),
            dedup=self.board.dedup,
            due_soon_window=self.due_soon_window,
        )
        added = self.board.extend(candidates)

        if added:
            logger.info("Tick at %s: %d new reminder(s)", now.isoformat(timespec="seconds"), len(added))
        else:
            logger.debug("Tick at %s: nothing new", now.isoformat(timespec="seconds"))

        for reminder in added:
            for listener in list(self._listeners):
                try:
                    listener(reminder)
                except Exception:
                    logger.exception("reminder listener failed")
        return added

    def _scheduled_tick(self) -> None:
        with self._tick_lock:
            if not self._running:
                return
            self._tick_locked()

    # ---- lifecycle ----

    @property
    def running(self) -> bool:
        return self._running

    def start(self, timer: IntervalTimer) -> None:
        """Tick once immediately, then every check_interval_seconds via `timer`."""
        if self._running:
            logger.warning("Engine already started; start ignored")
            return

        with self._tick_lock:
            self._running = True
            self._timer = timer
        self.tick()
        timer.start(self._scheduled_tick, self.check_interval_seconds)

    def stop(self) -> None:
        with self._tick_lock:
            if not self._running:
                return
            self._running = False
            timer = self._timer
            self._timer = None

        if timer is not None:
            try:
                timer.stop()
            except Exception:
                logger.exception("Failed to stop reminder timer.")

    @contextlib.contextmanager
    def running_with(self, timer: IntervalTimer) -> Iterator[TaskEngine]:
        self.start(timer)
        try:
            yield self
        finally:
            self.stop()
