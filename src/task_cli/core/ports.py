# src/task_cli/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the menu handlers.

Handlers depend on Protocols instead of concrete implementations, so tests can
drive them with an in-memory store and a scripted console.
"""

from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    def insert(self, description: str) -> int: ...
    def list_ordered(self) -> list[Task]: ...
    def update_completed(self, task_id: int) -> int: ...
    def delete(self, task_id: int) -> int: ...


class Console(Protocol):
    """Line-oriented user I/O. read_line raises EOFError when input is exhausted."""

    def read_line(self, prompt: str) -> str: ...
    def write(self, text: str) -> None: ...


class StdConsole:
    """Console over stdin/stdout."""

    def read_line(self, prompt: str) -> str:
        return input(prompt)

    def write(self, text: str) -> None:
        print(text, flush=True)
