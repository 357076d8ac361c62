# src/duesoon/logging_setup.py

"""
Logging for the interactive duesoon session.

The console shares stderr with the prompt, so it only carries what the user
should see while typing commands. The log file under data_dir keeps
everything, including per-tick debug lines from the reminder engine.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "duesoon.log"

# Loggers that run on the reminder timer thread. Every check logs a tick line
# and new reminders are already printed by the console connector, so these
# reach the console only at WARNING+.
TIMER_THREAD_LOGGERS = ("duesoon.tasks.task_scheduler", "duesoon.core.engine")


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the prompt readable:
    - store/command logs pass through
    - timer thread logs need WARNING+
    - anything outside duesoon (py.warnings included) needs ERROR+
    """

    def __init__(self, quiet_prefixes: tuple[str, ...] = TIMER_THREAD_LOGGERS) -> None:
        super().__init__()
        self.quiet_prefixes = quiet_prefixes

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("duesoon."):
            return record.levelno >= logging.ERROR
        if name.startswith(self.quiet_prefixes):
            return record.levelno >= logging.WARNING
        return True


def level_from_name(name: str | None, default: int = logging.INFO) -> int:
    """Map DUESOON_LOG_LEVEL ("debug", "WARNING", ...) to a logging level."""
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(
    *,
    log_dir: str | Path = ".local/duesoon",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install the console and file handlers on the root logger.

    Safe to call again (tests, restarts): previous root handlers are closed
    and replaced. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(threadName)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
