# tests/test_due_dates.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from duesoon.tasks.due_dates import DueStatus, due_status, format_due_date, parse_due_date

NOW = datetime(2026, 10, 18, 12, 0, 0)


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=-1), "Overdue"),
        (timedelta(seconds=30), "Due in 0 minutes"),
        (timedelta(minutes=1), "Due in 1 minute"),
        (timedelta(minutes=59, seconds=59), "Due in 59 minutes"),
        (timedelta(hours=1), "Due in 1 hour"),
        (timedelta(hours=23, minutes=59), "Due in 23 hours"),
        (timedelta(hours=24), "Due 2026-10-19 at 12:00"),
    ],
)
def test_format_due_date(delta: timedelta, expected: str) -> None:
    assert format_due_date(NOW + delta, NOW) == expected


def test_format_without_due_date() -> None:
    assert format_due_date(None, NOW) == ""


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (None, DueStatus.NONE),
        (timedelta(seconds=-1), DueStatus.OVERDUE),
        (timedelta(0), DueStatus.WITHIN_HOUR),
        (timedelta(hours=1), DueStatus.WITHIN_DAY),
        (timedelta(hours=24), DueStatus.LATER),
    ],
)
def test_due_status(delta, expected) -> None:
    due = None if delta is None else NOW + delta
    assert due_status(due, NOW) is expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2026-10-18T17:30", datetime(2026, 10, 18, 17, 30)),
        ("2026-10-18 17:30", datetime(2026, 10, 18, 17, 30)),
        ("2026-10-18T17:30:15", datetime(2026, 10, 18, 17, 30, 15)),
        ("2026-10-18", datetime(2026, 10, 18)),
    ],
)
def test_parse_local_strings(raw: str, expected: datetime) -> None:
    assert parse_due_date(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "   ",
        "tomorrow",
        "2026-13-40T99:99",
        # valid ISO offsets that fall outside datetime range once converted
        "9999-12-31T23:59-05:00",
        "0001-01-01T00:00+05:00",
    ],
)
def test_parse_invalid_means_no_deadline(raw) -> None:
    assert parse_due_date(raw) is None


def test_parse_aware_input_becomes_local_naive() -> None:
    parsed = parse_due_date("2026-10-18T12:00:00+00:00")
    assert parsed is not None
    assert parsed.tzinfo is None
    expected = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert parsed == expected
