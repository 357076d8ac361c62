"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskFilter, Reminder, ...)
- task_store.py: in-memory ordered store + view filter
- reminders.py: due-soon/overdue evaluation and the active reminder board
- due_dates.py: due-date parsing and display formatting
- task_scheduler.py: periodic loop that drives reminder ticks
"""
