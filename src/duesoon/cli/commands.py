# src/duesoon/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import datetime
from typing import cast

from ..core.state import AppState
from ..tasks.due_dates import DueStatus, due_status, format_due_date
from ..tasks.reminders import classify
from ..tasks.task_models import ReminderKind, Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()

_STATUS_MARKS = {
    DueStatus.NONE: " ",
    DueStatus.OVERDUE: "!",
    DueStatus.WITHIN_HOUR: "*",
    DueStatus.WITHIN_DAY: "~",
    DueStatus.LATER: " ",
}


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def render_task(task: Task, now: datetime) -> str:
    check = "x" if task.completed else " "
    mark = _STATUS_MARKS[due_status(task.due_at, now)] if not task.completed else " "
    line = f"{mark}[{check}] #{task.id} {task.text}"
    if task.due_at is not None:
        line += f"  ({format_due_date(task.due_at, now)})"
    return line


def render_view(state: AppState) -> str:
    engine = state.engine
    now = engine.clock()
    tasks = engine.view()

    lines = [f"Tasks ({engine.filter.value}):"]
    if not tasks:
        lines.append("  No tasks found")
    for task in tasks:
        lines.append("  " + render_task(task, now))

    lines.append(f"{engine.remaining_count()} items left")
    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    engine = state.engine
    return (
        "Status:\n"
        f"  Tasks: {engine.store.count_tasks()} ({engine.remaining_count()} open)\n"
        f"  Filter: {engine.filter.value}\n"
        f"  Active reminders: {len(engine.board)}\n"
        f"  Reminder dedup: {engine.board.dedup.value}\n"
        f"  Check interval: {engine.check_interval_seconds:g}s\n"
        f"  Timer: {'running' if engine.running else 'stopped'}"
    )


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <text>              -> task without deadline
    /add <text> @ <due>      -> task due at <due> (e.g. 2026-10-18T17:30)

    A task that is already overdue or due soon gets a heads-up via emit;
    the reminder itself is raised by the next engine tick.
    """
    raw = " ".join(args)
    text, sep, due_raw = raw.rpartition(" @ ")
    if not sep:
        text, due_raw = raw, ""

    task = state.engine.create(text.strip(), due_raw.strip() or None)
    if task is None:
        return "Usage: /add <text> [@ YYYY-MM-DDTHH:MM]"

    if due_raw.strip() and task.due_at is None:
        return f"Added #{task.id}: {task.text} (could not parse due date, no deadline set)"

    if emit is not None:
        kind = classify(task, state.engine.clock(), state.engine.due_soon_window)
        if kind is not None:
            label = "overdue" if kind is ReminderKind.OVERDUE else "due soon"
            emit(f"Heads-up: #{task.id} is already {label}; a reminder will follow on the next check.")
    return f"Added #{task.id}: {task.text}"


def cmd_toggle(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /toggle <id>"
    task = state.engine.toggle(task_id)
    if task is None:
        return f"No task #{task_id}."
    return f"#{task.id} marked {'completed' if task.completed else 'active'}."


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /del <id>"
    if not state.engine.delete(task_id):
        return f"No task #{task_id}."
    return f"Deleted #{task_id}."


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Filter is {state.engine.filter.value}. Use /filter all|active|completed."
    if not state.engine.set_filter(args[0]):
        return "Usage: /filter all|active|completed"
    return render_view(state)


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_view(state)


def cmd_reminders(state: AppState, args: list[str]) -> str:
    messages = state.engine.reminders()
    if not messages:
        return "No active reminders."
    lines = ["Reminders:"]
    for i, text in enumerate(messages, start=1):
        lines.append(f"  {i}. {text}")
    return "\n".join(lines)


def cmd_dismiss(state: AppState, args: list[str]) -> str:
    """
    /dismiss <n>  -> dismiss reminder number n (1-based, as shown by /reminders)
    """
    n = _parse_id(args)
    if n is None:
        return "Usage: /dismiss <n>"

    reminder = state.engine.dismiss_reminder(n - 1)
    if reminder is None:
        return f"No reminder {n}."

    logger.debug("Dismissed reminder %s (task_id=%s)", n, reminder.task_id)
    return f"Dismissed: {reminder.text}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task/reminder counters and settings.")
registry.register("add", cmd_add, help_text="Add a task: /add <text> [@ YYYY-MM-DDTHH:MM].")
registry.register("list", cmd_list, help_text="Show tasks for the current filter.", aliases=["ls"])
registry.register("toggle", cmd_toggle, help_text="Toggle completion: /toggle <id>.", aliases=["done"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <id>.", aliases=["rm"])
registry.register("filter", cmd_filter, help_text="Set view filter: /filter all|active|completed.")
registry.register("reminders", cmd_reminders, help_text="Show active reminders.", aliases=["r"])
registry.register("dismiss", cmd_dismiss, help_text="Dismiss a reminder: /dismiss <n>.")
