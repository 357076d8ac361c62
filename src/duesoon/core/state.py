# src/duesoon/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .engine import TaskEngine


@dataclass
class AppState:
    """
    Everything a connector or command handler needs.

    settings is typed as Any so tests can pass a SimpleNamespace.
    """

    settings: Any
    engine: TaskEngine
