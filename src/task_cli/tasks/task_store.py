# src/task_cli/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from typing import Any

from sqlalchemy import (
    Boolean,
    Column,
    Connection,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    func,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from .task_models import Task

logger = logging.getLogger(__name__)

metadata = MetaData()

tasks_table = Table(
    "tasks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("description", String(255), nullable=False),
    Column("completed", Boolean, nullable=False, server_default=text("0")),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)


class StoreError(RuntimeError):
    """The database could not be reached or a statement failed."""


class TaskStore:
    """
    SQL task store over a bounded connection pool.

    - every statement is a SQLAlchemy Core construct, so values are always bound parameters
    - the pool is capped at pool_size connections (no overflow)
    - failures surface as StoreError; nothing is retried
    """

    def __init__(
        self,
        database_url: str,
        *,
        pool_size: int = 5,
        pool_timeout: float = 30.0,
    ) -> None:
        self._engine = self._build_engine(database_url, pool_size, pool_timeout)
        logger.info(
            "TaskStore created url=%s pool_size=%s",
            self._engine.url.render_as_string(hide_password=True),
            pool_size,
        )

    @staticmethod
    def _build_engine(url: str, pool_size: int, pool_timeout: float) -> Engine:
        try:
            is_sqlite = make_url(url).get_backend_name() == "sqlite"
        except SQLAlchemyError as e:
            raise StoreError(f"Invalid database URL: {e}") from e

        connect_args: dict[str, Any] = {}
        if is_sqlite:
            connect_args["check_same_thread"] = False

        try:
            return create_engine(
                url,
                poolclass=QueuePool,
                pool_size=pool_size,
                max_overflow=0,
                pool_timeout=pool_timeout,
                pool_pre_ping=not is_sqlite,
                connect_args=connect_args,
            )
        except (SQLAlchemyError, ImportError) as e:
            # ImportError: the DBAPI driver for this URL is not installed.
            raise StoreError(f"Cannot create database engine: {e}") from e

    @property
    def engine(self) -> Engine:
        return self._engine

    def close(self) -> None:
        """Dispose the pool (closes idle connections)."""
        self._engine.dispose()
        logger.debug("TaskStore pool disposed")

    # ---- low-level helpers ----

    @contextlib.contextmanager
    def _begin(self, op: str) -> Iterator[Connection]:
        """Borrow a pooled connection inside a transaction; translate driver errors."""
        try:
            with self._engine.begin() as conn:
                yield conn
        except (SQLAlchemyError, OverflowError) as e:
            # OverflowError: an int parameter too wide for the driver to bind.
            logger.debug("TaskStore %s failed: %s", op, e)
            raise StoreError(f"Database error during {op}: {e}") from e

    @staticmethod
    def _row_to_task(row: Any) -> Task:
        return Task(
            id=int(row.id),
            description=str(row.description or ""),
            completed=bool(row.completed),
            created_at=row.created_at,
        )

    # ---- setup ----

    def ping(self) -> None:
        """Check out one connection and run a trivial query."""
        with self._begin("ping") as conn:
            conn.execute(select(1))
        logger.debug("TaskStore ping ok")

    def ensure_schema(self) -> None:
        """Create the tasks table if it does not exist (no migrations)."""
        with self._begin("ensure_schema") as conn:
            metadata.create_all(conn, checkfirst=True)
        logger.info("TaskStore schema ensured")

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._begin("count") as conn:
            n = conn.execute(select(func.count()).select_from(tasks_table)).scalar_one()
        return int(n)

    def insert(self, description: str) -> int:
        if not description or not description.strip():
            raise ValueError("description is required")

        with self._begin("insert") as conn:
            result = conn.execute(insert(tasks_table).values(description=description))
            affected = int(result.rowcount)
        logger.debug("Task inserted rows=%s", affected)
        return affected

    def list_ordered(self) -> list[Task]:
        """All tasks, newest first."""
        stmt = select(
            tasks_table.c.id,
            tasks_table.c.description,
            tasks_table.c.completed,
            tasks_table.c.created_at,
        ).order_by(tasks_table.c.created_at.desc(), tasks_table.c.id.desc())

        with self._begin("list") as conn:
            rows = conn.execute(stmt).all()
        return [self._row_to_task(r) for r in rows]

    def update_completed(self, task_id: int) -> int:
        """Set completed = true; returns rows affected (0 = no such id)."""
        stmt = update(tasks_table).where(tasks_table.c.id == int(task_id)).values(completed=True)
        with self._begin("update_completed") as conn:
            affected = int(conn.execute(stmt).rowcount)
        logger.debug("Task completed id=%s rows=%s", task_id, affected)
        return affected

    def delete(self, task_id: int) -> int:
        """Delete by id; returns rows affected (0 = no such id)."""
        stmt = delete(tasks_table).where(tasks_table.c.id == int(task_id))
        with self._begin("delete") as conn:
            affected = int(conn.execute(stmt).rowcount)
        logger.debug("Task deleted id=%s rows=%s", task_id, affected)
        return affected
