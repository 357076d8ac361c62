# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from duesoon.cli.bootstrap import create_initial_state
from duesoon.core.engine import TaskEngine
from duesoon.core.state import AppState
from duesoon.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeIntervalTimer


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def timer() -> FakeIntervalTimer:
    return FakeIntervalTimer()


@pytest.fixture()
def store(clock: FakeClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def engine(clock: FakeClock, store: TaskStore) -> TaskEngine:
    return TaskEngine(clock=clock, store=store, check_interval_seconds=60.0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="duesoon-test",
        log_level="INFO",
        data_dir=tmp_path / "data",
        check_interval_seconds=60.0,
        due_soon_minutes=15.0,
        reminder_dedup="message",
        seed_demo_tasks=False,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FakeClock) -> AppState:
    return create_initial_state(settings=settings, clock=clock)
