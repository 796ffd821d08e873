# src/task_cli/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import tzinfo

from ..core.ports import Console, TaskRepo
from ..tasks.task_time import GapPolicy, format_timestamp

logger = logging.getLogger(__name__)

ActionHandler = Callable[..., None]

EXIT_CHOICE = "5"

# ASCII digits only: int() alone also takes "1_0" and non-ASCII digits.
TASK_ID_RE = re.compile(r"[+-]?[0-9]+")
TASK_ID_MIN = -(2**31)
TASK_ID_MAX = 2**31 - 1


def _parse_task_id(raw: str) -> int | None:
    """Signed ASCII decimal within the 32-bit INT range of the id column, else None."""
    if not TASK_ID_RE.fullmatch(raw):
        return None
    value = int(raw)
    if not TASK_ID_MIN <= value <= TASK_ID_MAX:
        return None
    return value


def _read_task_id(console: Console, prompt: str) -> int | None:
    task_id = _parse_task_id(console.read_line(prompt).strip())
    if task_id is None:
        console.write("Invalid task ID. Please enter a number.")
    return task_id


def cmd_add(store: TaskRepo, console: Console, **_: object) -> None:
    description = console.read_line("Enter task description: ").strip()
    if not description:
        console.write("Task description cannot be empty.")
        return

    affected = store.insert(description)
    if affected > 0:
        console.write(f"Task '{description}' added successfully!")
    else:
        logger.warning("Insert reported 0 rows for description=%r", description)
        console.write("Failed to add task.")


def cmd_list(
    store: TaskRepo,
    console: Console,
    *,
    tz: tzinfo | None = None,
    gap_policy: GapPolicy = GapPolicy.ERROR,
    **_: object,
) -> None:
    tasks = store.list_ordered()
    if not tasks:
        console.write("No tasks found.")
        return

    console.write("\n--- Your Tasks ---")
    for task in tasks:
        created = format_timestamp(task.created_at, tz, gap_policy=gap_policy)
        console.write(
            f"ID: {task.id}, {task.status_tag} Description: '{task.description}' "
            f"(Created: {created})"
        )


def cmd_complete(store: TaskRepo, console: Console, **_: object) -> None:
    task_id = _read_task_id(console, "Enter the ID of the task to mark as completed: ")
    if task_id is None:
        return

    if store.update_completed(task_id) > 0:
        console.write(f"Task with ID {task_id} marked as completed.")
    else:
        console.write(f"No task found with ID {task_id}. Nothing updated.")


def cmd_delete(store: TaskRepo, console: Console, **_: object) -> None:
    task_id = _read_task_id(console, "Enter the ID of the task to delete: ")
    if task_id is None:
        return

    if store.delete(task_id) > 0:
        console.write(f"Task with ID {task_id} deleted successfully.")
    else:
        console.write(f"No task found with ID {task_id}. Nothing deleted.")


@dataclass(slots=True)
class MenuItem:
    choice: str
    label: str
    handler: ActionHandler


class MenuRegistry:
    """Numbered menu: choice string -> action handler."""

    def __init__(self) -> None:
        self._items: dict[str, MenuItem] = {}

    def register(self, choice: str, label: str, handler: ActionHandler) -> None:
        self._items[choice] = MenuItem(choice=choice, label=label, handler=handler)

    def build_menu(self) -> str:
        lines = ["\n--- Task Management CLI ---"]
        for item in self._items.values():
            lines.append(f"{item.choice}. {item.label}")
        lines.append(f"{EXIT_CHOICE}. Exit")
        return "\n".join(lines)

    def handle(
        self,
        choice: str,
        store: TaskRepo,
        console: Console,
        *,
        tz: tzinfo | None = None,
        gap_policy: GapPolicy = GapPolicy.ERROR,
    ) -> bool:
        """
        Run the handler for `choice`.
        Returns False if the choice is not a registered menu item.
        """
        item = self._items.get(choice)
        if item is None:
            return False

        logger.debug("Menu choice %s (%s)", choice, item.label)
        item.handler(store, console, tz=tz, gap_policy=gap_policy)
        return True


registry = MenuRegistry()

registry.register("1", "Add Task", cmd_add)
registry.register("2", "List Tasks", cmd_list)
registry.register("3", "Mark Task as Completed", cmd_complete)
registry.register("4", "Delete Task", cmd_delete)
