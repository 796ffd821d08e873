# src/task_cli/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the interactive menu until the
user exits. Exit codes: 0 normal exit, 1 database/timestamp failure,
2 configuration error.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import ConfigError, get_settings
from ..connectors.console_connector import run_console_loop
from ..core.ports import Console
from ..logging_setup import setup_logging
from ..tasks.task_store import StoreError
from ..tasks.task_time import TimestampConversionError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        store = getattr(state, "task_store", None)
        if store is not None and hasattr(store, "close"):
            store.close()
    except Exception:
        logger.debug("TaskStore close failed.", exc_info=True)


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def main(console: Console | None = None) -> int:
    try:
        settings = get_settings()
    except ConfigError as e:
        _fail(str(e))
        return EXIT_CONFIG

    setup_logging(log_dir=settings.data_dir, level=settings.log_level, sql_echo=settings.sql_echo)

    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        _fail(str(e))
        return EXIT_CONFIG
    except StoreError as e:
        logger.exception("Could not connect to the database.")
        _fail(str(e))
        return EXIT_FAILURE

    print("Connected to database!")

    try:
        run_console_loop(state, console)
    except (StoreError, TimestampConversionError) as e:
        logger.exception("Unrecoverable error, terminating.")
        _fail(str(e))
        return EXIT_FAILURE
    except OSError as e:
        logger.exception("Console I/O failed, terminating.")
        _fail(f"I/O failure: {e}")
        return EXIT_FAILURE
    finally:
        _shutdown(state)
        logger.info("Bye.")

    return EXIT_OK


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
