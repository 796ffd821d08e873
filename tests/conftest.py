# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from task_cli.core.state import AppState
from task_cli.tasks.task_store import TaskStore
from task_cli.tasks.task_time import GapPolicy


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-cli-test",
        log_level="WARNING",
        data_dir=tmp_path / "data",
        database_url=f"sqlite:///{tmp_path / 'tasks.sqlite3'}",
        pool_size=5,
        pool_timeout=5.0,
        auto_create_schema=True,
        sql_echo=False,
        timezone_name="UTC",
        dst_gap_policy=GapPolicy.ERROR,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> Iterator[TaskStore]:
    """Real TaskStore on a per-test SQLite file (schema created)."""
    s = TaskStore(settings.database_url, pool_size=settings.pool_size, pool_timeout=settings.pool_timeout)
    s.ensure_schema()
    yield s
    s.close()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(
        settings=settings,
        task_store=store,
        display_tz=ZoneInfo("UTC"),
        gap_policy=GapPolicy.ERROR,
    )


@pytest.fixture()
def restore_root_logging() -> Iterator[None]:
    """setup_logging() replaces root handlers; put them back after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
