# src/task_cli/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo

from ..tasks.task_time import GapPolicy
from .ports import TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules.
    settings: object

    task_store: TaskRepo
    display_tz: tzinfo | None = None
    gap_policy: GapPolicy = GapPolicy.ERROR
