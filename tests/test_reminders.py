# tests/test_reminders.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from duesoon.tasks.reminders import ReminderBoard, classify, evaluate_reminders
from duesoon.tasks.task_models import DedupPolicy, ReminderKind, Task

NOW = datetime(2026, 10, 18, 12, 0, 0)


def _task(task_id: int, text: str, due_in: timedelta | None, *, completed: bool = False) -> Task:
    return Task(
        id=task_id,
        text=text,
        created_at=NOW - timedelta(hours=1),
        completed=completed,
        due_at=None if due_in is None else NOW + due_in,
    )


@pytest.mark.parametrize(
    ("due_in", "expected"),
    [
        (timedelta(seconds=-1), ReminderKind.OVERDUE),
        (timedelta(0), ReminderKind.DUE_SOON),
        (timedelta(minutes=10), ReminderKind.DUE_SOON),
        (timedelta(minutes=15), ReminderKind.DUE_SOON),
        (timedelta(minutes=15, seconds=1), None),
        (timedelta(hours=3), None),
        (None, None),
    ],
)
def test_classify_thresholds(due_in, expected) -> None:
    assert classify(_task(1, "x", due_in), NOW) is expected


def test_completed_tasks_never_classified() -> None:
    assert classify(_task(1, "x", timedelta(minutes=-5), completed=True), NOW) is None
    assert classify(_task(1, "x", timedelta(minutes=5), completed=True), NOW) is None


def test_messages_and_order() -> None:
    tasks = [
        _task(1, "late", timedelta(minutes=-1)),
        _task(2, "soon", timedelta(minutes=5)),
        _task(3, "later", timedelta(hours=2)),
    ]
    out = evaluate_reminders(tasks, NOW)

    assert [r.text for r in out] == ['Task "soon" is due soon!', 'Task "late" is overdue!']
    assert [r.task_id for r in out] == [2, 1]
    assert all(r.created_at == NOW for r in out)


def test_identical_text_collapses_under_message_policy() -> None:
    tasks = [
        _task(1, "pay rent", timedelta(minutes=-10)),
        _task(2, "pay rent", timedelta(minutes=-20)),
    ]
    out = evaluate_reminders(tasks, NOW)
    assert [r.text for r in out] == ['Task "pay rent" is overdue!']


def test_identical_text_kept_apart_under_task_policy() -> None:
    tasks = [
        _task(1, "pay rent", timedelta(minutes=-10)),
        _task(2, "pay rent", timedelta(minutes=-20)),
    ]
    out = evaluate_reminders(tasks, NOW, dedup=DedupPolicy.TASK)
    assert [r.task_id for r in out] == [1, 2]


def test_seen_keys_are_skipped() -> None:
    tasks = [_task(1, "a", timedelta(minutes=-1)), _task(2, "b", timedelta(minutes=-1))]
    out = evaluate_reminders(tasks, NOW, seen={'Task "a" is overdue!'})
    assert [r.text for r in out] == ['Task "b" is overdue!']


def test_custom_window() -> None:
    task = _task(1, "a", timedelta(minutes=30))
    assert evaluate_reminders([task], NOW) == []
    out = evaluate_reminders([task], NOW, due_soon_window=timedelta(minutes=30))
    assert [r.kind for r in out] == [ReminderKind.DUE_SOON]


def test_board_message_policy_retriggers_after_dismiss() -> None:
    board = ReminderBoard()
    task = _task(1, "a", timedelta(minutes=-1))

    added = board.extend(evaluate_reminders([task], NOW, seen=board.seen_keys()))
    assert len(added) == 1
    assert evaluate_reminders([task], NOW, seen=board.seen_keys()) == []

    assert board.dismiss(0) is not None
    assert board.messages() == []

    again = board.extend(evaluate_reminders([task], NOW, seen=board.seen_keys()))
    assert [r.text for r in again] == ['Task "a" is overdue!']


def test_board_task_policy_fires_once_per_task() -> None:
    board = ReminderBoard(dedup=DedupPolicy.TASK)
    task = _task(1, "a", timedelta(minutes=-1))

    board.extend(evaluate_reminders([task], NOW, seen=board.seen_keys(), dedup=board.dedup))
    board.dismiss(0)
    again = evaluate_reminders([task], NOW, seen=board.seen_keys(), dedup=board.dedup)
    assert board.extend(again) == []

    board.forget_task(1)
    assert (1, ReminderKind.OVERDUE) not in board.seen_keys()


def test_board_extend_deduplicates_itself() -> None:
    board = ReminderBoard()
    r = evaluate_reminders([_task(1, "a", timedelta(minutes=-1))], NOW)
    board.extend(r)
    assert board.extend(r) == []
    assert len(board) == 1


@pytest.mark.parametrize("index", [-1, 1, 5])
def test_board_dismiss_out_of_range_is_noop(index: int) -> None:
    board = ReminderBoard()
    board.extend(evaluate_reminders([_task(1, "a", timedelta(minutes=-1))], NOW))
    assert board.dismiss(index) is None
    assert len(board) == 1
