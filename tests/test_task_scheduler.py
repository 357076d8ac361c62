# tests/test_task_scheduler.py

from __future__ import annotations

import asyncio
import threading
import time

import pytest

from duesoon.tasks.task_scheduler import BackgroundIntervalTimer, run_periodic


@pytest.mark.asyncio
async def test_periodic_loop_ticks_until_cancelled() -> None:
    calls: list[float] = []

    runner = asyncio.create_task(run_periodic(lambda: calls.append(time.monotonic()), interval_seconds=0.01))

    await asyncio.sleep(0.08)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner

    assert len(calls) >= 2, "Loop should tick more than once"


@pytest.mark.asyncio
async def test_periodic_loop_survives_failing_tick() -> None:
    calls = {"n": 0}

    def tick() -> None:
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("boom")

    stop = asyncio.Event()
    runner = asyncio.create_task(run_periodic(tick, interval_seconds=0.01, stop_event=stop))

    await asyncio.sleep(0.08)
    stop.set()
    await asyncio.wait_for(runner, timeout=1.0)

    assert calls["n"] >= 2


@pytest.mark.asyncio
async def test_stop_event_ends_loop_without_extra_tick() -> None:
    calls = {"n": 0}

    def tick() -> None:
        calls["n"] += 1

    stop = asyncio.Event()
    stop.set()
    await asyncio.wait_for(run_periodic(tick, interval_seconds=10.0, stop_event=stop), timeout=1.0)
    assert calls["n"] == 0


def test_background_timer_start_stop() -> None:
    fired = threading.Event()
    calls = {"n": 0}

    def tick() -> None:
        calls["n"] += 1
        fired.set()

    timer = BackgroundIntervalTimer(join_timeout=2.0)
    timer.start(tick, 0.01)
    try:
        assert fired.wait(timeout=2.0)
        assert timer.running
    finally:
        timer.stop()

    assert not timer.running
    after_stop = calls["n"]
    time.sleep(0.05)
    assert calls["n"] == after_stop

    # stopping twice is harmless
    timer.stop()
