# src/duesoon/tasks/due_dates.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from enum import StrEnum

logger = logging.getLogger(__name__)

_HOUR = timedelta(hours=1)
_DAY = timedelta(hours=24)

_FORMATS = (
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
)


class DueStatus(StrEnum):
    """Display-only urgency bucket; never affects reminders."""

    NONE = "none"
    OVERDUE = "overdue"
    WITHIN_HOUR = "within_hour"
    WITHIN_DAY = "within_day"
    LATER = "later"


def parse_due_date(raw: str | None) -> datetime | None:
    """
    Parse a local date-time string (datetime-local style) into a naive datetime.

    Empty or unparseable input means "no deadline" and returns None.
    Offset-aware inputs are converted to local wall-clock time.
    """
    if raw is None:
        return None
    s = raw.strip()
    if not s:
        return None

    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        dt = None
        for fmt in _FORMATS:
            try:
                dt = datetime.strptime(s, fmt)
                break
            except ValueError:
                continue

    if dt is None:
        logger.info("Unparseable due date %r; treating as no deadline", raw)
        return None

    if dt.tzinfo is not None:
        try:
            dt = dt.astimezone().replace(tzinfo=None)
        except (OverflowError, ValueError):
            logger.info("Due date %r out of range in local time; treating as no deadline", raw)
            return None
    return dt


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def format_due_date(due_at: datetime | None, now: datetime) -> str:
    if due_at is None:
        return ""

    delta = due_at - now
    if delta < timedelta(0):
        return "Overdue"

    if delta < _HOUR:
        minutes = int(delta // timedelta(minutes=1))
        return f"Due in {_plural(minutes, 'minute')}"

    if delta < _DAY:
        hours = int(delta // _HOUR)
        return f"Due in {_plural(hours, 'hour')}"

    return f"Due {due_at:%Y-%m-%d} at {due_at:%H:%M}"


def due_status(due_at: datetime | None, now: datetime) -> DueStatus:
    if due_at is None:
        return DueStatus.NONE

    delta = due_at - now
    if delta < timedelta(0):
        return DueStatus.OVERDUE
    if delta < _HOUR:
        return DueStatus.WITHIN_HOUR
    if delta < _DAY:
        return DueStatus.WITHIN_DAY
    return DueStatus.LATER
