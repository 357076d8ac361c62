# src/duesoon/tasks/task_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

A small polling loop that calls a tick callback every interval_seconds until
it is cancelled or its stop event is set. BackgroundIntervalTimer runs that
loop on its own asyncio event loop in a daemon thread, so the blocking console
REPL can keep the main thread.

What a tick does (evaluate reminders, append to the board) belongs to the
engine, not the scheduler.
"""

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


async def run_periodic(
        callback: Callable[[], None],
        *,
        interval_seconds: float = 60.0,
        stop_event: asyncio.Event | None = None,
) -> None:
    """
    Simple polling loop.

    Every interval_seconds:
    - call callback()
    - log and swallow its errors so one bad tick does not kill the loop

    The first call happens after one interval. To stop the loop, cancel the
    coroutine/task or set stop_event.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while True:
        if stop_event is None:
            await asyncio.sleep(sleep_s)
        else:
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)
            except TimeoutError:
                pass

        if stop_event is not None and stop_event.is_set():
            logger.debug("Periodic loop stop requested")
            return

        try:
            callback()
        except Exception:
            logger.exception("periodic tick failed")


class BackgroundIntervalTimer:
    """
    IntervalTimer backed by run_periodic() in a background thread.

    stop() signals the loop and joins the thread, so no callback fires after
    it returns (unless the join times out, which is logged).
    """

    def __init__(self, *, join_timeout: float = 10.0) -> None:
        self._join_timeout = join_timeout
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event: asyncio.Event | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, callback: Callable[[], None], interval_seconds: float) -> None:
        if self.running:
            logger.warning("Reminder timer already running; start ignored")
            return

        ready = threading.Event()

        def runner() -> None:
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
            stop_event = asyncio.Event()

            self._loop = loop
            self._stop_event = stop_event
            ready.set()

            try:
                loop.run_until_complete(
                    run_periodic(callback, interval_seconds=interval_seconds, stop_event=stop_event)
                )
            finally:
                with contextlib.suppress(Exception):
                    loop.stop()
                with contextlib.suppress(Exception):
                    loop.close()

        t = threading.Thread(target=runner, name="duesoon-reminders", daemon=True)
        t.start()
        ready.wait(timeout=5.0)
        self._thread = t
        logger.info("Reminder timer started (interval=%.1fs)", interval_seconds)

    def stop(self) -> None:
        loop, stop_event, thread = self._loop, self._stop_event, self._thread
        if thread is None:
            return

        if loop is not None and stop_event is not None:
            try:
                loop.call_soon_threadsafe(stop_event.set)
            except RuntimeError:
                logger.debug("Reminder loop already closed.", exc_info=True)

        thread.join(timeout=self._join_timeout)
        if thread.is_alive():
            logger.error("Reminder timer thread did not stop within %.1fs", self._join_timeout)
        else:
            logger.info("Reminder timer stopped")

        self._thread = None
        self._loop = None
        self._stop_event = None
