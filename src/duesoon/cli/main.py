# src/duesoon/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the background reminder timer,
then runs the console REPL in the main thread until /exit, EOF or a signal.
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import print_reminder, run_console_loop
from ..logging_setup import level_from_name, setup_logging
from ..tasks.task_scheduler import BackgroundIntervalTimer

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    console_level = level_from_name(getattr(settings, "log_level", "INFO"))
    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    state = create_initial_state(settings=settings)
    engine = state.engine
    engine.add_listener(print_reminder)

    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()
        raise KeyboardInterrupt

    try:
        signal.signal(signal.SIGINT, _handle_signal)
        signal.signal(signal.SIGTERM, _handle_signal)
    except (ValueError, OSError, AttributeError):
        # Not in the main thread, or the platform lacks SIGTERM.
        logger.debug("Signal handlers not installed.", exc_info=True)

    try:
        with engine.running_with(BackgroundIntervalTimer()):
            run_console_loop(state, stop=stop_main)
    except KeyboardInterrupt:
        logger.info("Interrupted.")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
