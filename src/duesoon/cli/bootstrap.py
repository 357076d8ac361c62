# src/duesoon/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the engine (clock, store, reminder policy) into AppState,
- optionally seeds demo tasks.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from ..config import get_settings
from ..core.engine import TaskEngine
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.task_models import DedupPolicy
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

DEMO_TASKS: tuple[tuple[str, timedelta], ...] = (
    ("Learn React", timedelta(hours=1)),
    ("Build a todo app", timedelta(hours=2)),
    ("Deploy to production", timedelta(hours=24)),
)


def seed_demo_tasks(engine: TaskEngine) -> int:
    now = engine.clock()
    created = 0
    for text, offset in DEMO_TASKS:
        if engine.create_at(text, now + offset) is not None:
            created += 1
    logger.info("Seeded %d demo tasks", created)
    return created


def create_initial_state(*, settings=None, clock: Clock = datetime.now) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    engine = TaskEngine(
        clock=clock,
        store=TaskStore(clock=clock),
        dedup=DedupPolicy.parse(str(getattr(settings, "reminder_dedup", "message"))),
        due_soon_window=timedelta(minutes=float(settings.due_soon_minutes)),
        check_interval_seconds=float(settings.check_interval_seconds),
    )

    if getattr(settings, "seed_demo_tasks", False):
        seed_demo_tasks(engine)

    return AppState(settings=settings, engine=engine)
