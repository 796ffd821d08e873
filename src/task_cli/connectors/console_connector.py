# src/task_cli/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import EXIT_CHOICE
from ..cli.commands import registry as menu_registry
from ..core.ports import Console, StdConsole
from ..core.state import AppState

logger = logging.getLogger(__name__)


def run_console_loop(state: AppState, console: Console | None = None) -> None:
    """
    Interactive menu loop: one choice, one handler, one store round trip per iteration.

    Returns on the exit choice or end of input. Store and timestamp errors propagate.
    """
    console = console or StdConsole()
    logger.info("Console connector started.")

    while True:
        console.write(menu_registry.build_menu())
        try:
            choice = console.read_line("Enter your choice: ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            console.write("")
            break

        if choice == EXIT_CHOICE:
            console.write("Exiting application. Goodbye!")
            logger.info("Console exit choice received.")
            break

        try:
            handled = menu_registry.handle(
                choice,
                state.task_store,
                console,
                tz=state.display_tz,
                gap_policy=state.gap_policy,
            )
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input ended inside a prompt, exiting.")
            break

        if not handled:
            console.write("Invalid choice. Please try again.")

    logger.info("Console connector finished.")
