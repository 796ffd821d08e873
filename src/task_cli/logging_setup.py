# src/task_cli/logging_setup.py

"""
Logging for an interactive menu app.

stderr only shows what the user should see next to the menu (task_cli logs at
the configured level, anything else at ERROR); the log file gets everything.
SQL statement echo is a logger level on sqlalchemy.engine, so it lands in the
file and never interleaves with menu output.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any

APP_LOGGER = "task_cli"
LOG_FILE_NAME = "task_cli.log"


class MenuSafeFilter(logging.Filter):
    """Console filter: app records pass, third-party records only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == APP_LOGGER or record.name.startswith(APP_LOGGER + "."):
            return True
        return record.levelno >= logging.ERROR


def parse_level(name: str | None, default: int = logging.WARNING) -> int:
    """'info' / 'DEBUG' / '20' -> logging level; unknown names fall back to default."""
    if not name:
        return default
    raw = str(name).strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def build_logging_config(
    log_file: Path,
    *,
    console_level: int,
    sql_echo: bool = False,
) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "filters": {
            "menu_safe": {"()": MenuSafeFilter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "level": console_level,
                "formatter": "default",
                "filters": ["menu_safe"],
            },
            "file": {
                "class": "logging.FileHandler",
                "filename": str(log_file),
                "encoding": "utf-8",
                "level": logging.DEBUG,
                "formatter": "default",
            },
        },
        "loggers": {
            # INFO on sqlalchemy.engine is what create_engine(echo=True) would enable.
            "sqlalchemy.engine": {"level": logging.INFO if sql_echo else logging.WARNING},
            "sqlalchemy.pool": {"level": logging.WARNING},
        },
        "root": {"level": logging.DEBUG, "handlers": ["console", "file"]},
    }


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasks",
    level: str | int | None = None,
    sql_echo: bool = False,
) -> Path:
    """Configure logging once, before the first log call. Returns the log file path."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    console_level = level if isinstance(level, int) else parse_level(level)
    logging.config.dictConfig(
        build_logging_config(log_file, console_level=console_level, sql_echo=sql_echo)
    )
    logging.captureWarnings(True)
    return log_file
