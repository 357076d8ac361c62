# src/duesoon/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Bad values never crash startup; they fall back to defaults.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .tasks.task_models import DedupPolicy

ENV_PREFIX = "DUESOON"

# Upper bound for the due-soon window (one week).
_MAX_WINDOW_MINUTES = 7 * 24 * 60.0

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(
    name: str,
    default: float,
    *,
    minimum: float = 0.0,
    inclusive: bool = False,
    maximum: float = math.inf,
) -> float:
    """
    Read a finite float from the environment.

    Missing, unparseable, non-finite or out-of-range values return default.
    minimum is exclusive unless inclusive=True; maximum is inclusive.
    """
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if not math.isfinite(value):
        return default
    if value < minimum or (value == minimum and not inclusive) or value > maximum:
        return default
    return value


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Reminders ----
    check_interval_seconds: float
    due_soon_minutes: float
    reminder_dedup: DedupPolicy

    # ---- Demo ----
    seed_demo_tasks: bool

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "duesoon") or "duesoon",
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/duesoon")),
            check_interval_seconds=_env_float(_k("CHECK_INTERVAL_SECONDS"), 60.0),
            due_soon_minutes=_env_float(
                _k("DUE_SOON_MINUTES"), 15.0, minimum=0.0, inclusive=True, maximum=_MAX_WINDOW_MINUTES
            ),
            reminder_dedup=DedupPolicy.parse(os.getenv(_k("REMINDER_DEDUP"))),
            seed_demo_tasks=_env_bool(_k("SEED_DEMO_TASKS"), False),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
