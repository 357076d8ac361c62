# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting; copy the keys you need into .env.
"""

ENV_VARS = {
    # App / logging
    "DUESOON_APP_NAME": "App display name (default: duesoon).",
    "DUESOON_LOG_LEVEL": "Console logging level (default: INFO).",
    "DUESOON_DATA_DIR": "Local data directory for logs (default: .local/duesoon).",
    # Reminders
    "DUESOON_CHECK_INTERVAL_SECONDS": "Seconds between reminder checks (default: 60).",
    "DUESOON_DUE_SOON_MINUTES": "Due-soon window in minutes (default: 15).",
    "DUESOON_REMINDER_DEDUP": (
        "message (default): suppress reminders whose text is already shown; "
        "task: remind once per task and kind, even after dismissal."
    ),
    # Demo
    "DUESOON_SEED_DEMO_TASKS": "Create three sample tasks at startup (true/false).",
}
