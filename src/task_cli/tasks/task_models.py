# src/task_cli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Task:
    """
    One row of the `tasks` table.

    Notes:
    - id is assigned by the store and never changes.
    - completed only ever goes False -> True.
    - created_at is naive (no zone), as the store returns it.
    """

    id: int
    description: str
    completed: bool
    created_at: datetime

    @property
    def status_tag(self) -> str:
        return "[COMPLETED]" if self.completed else "[PENDING]"
