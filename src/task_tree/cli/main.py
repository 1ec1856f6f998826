# src/task_tree/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the stored tree, runs the console
REPL, then snapshots the tree back to disk (when autosave is on).
"""

from __future__ import annotations

import logging
import sqlite3

from ..cli.bootstrap import create_initial_state, load_tree, save_tree
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown: a failed save is logged, never raised."""
    if getattr(state.settings, "autosave", True) and state.dirty:
        try:
            save_tree(state)
        except sqlite3.Error:
            logger.exception("Failed to save the task tree.")

    released = state.tree.clear()
    logger.debug("Released %d tasks on shutdown.", released)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        load_tree(state)
    except sqlite3.Error:
        logger.exception("Failed to load stored tasks; starting with an empty tree.")

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled. Nothing to do.")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
