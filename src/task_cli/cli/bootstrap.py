# src/task_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- validates the settings needed to start,
- builds the pooled TaskStore and checks connectivity,
- wires everything into AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_task_store(settings: Settings) -> TaskStore:
    store = TaskStore(
        settings.require_database_url(),
        pool_size=settings.pool_size,
        pool_timeout=settings.pool_timeout,
    )
    try:
        store.ping()
        if settings.auto_create_schema:
            store.ensure_schema()
        logger.info("TaskStore ready total=%s", store.count_tasks())
    except Exception:
        store.close()
        raise
    return store


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    display_tz = settings.display_tz()

    return AppState(
        settings=settings,
        task_store=create_task_store(settings),
        display_tz=display_tz,
        gap_policy=settings.dst_gap_policy,
    )
