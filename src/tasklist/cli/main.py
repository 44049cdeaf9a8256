# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (one task store for the whole process),
then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..errors import TaskStoreError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.task_store.close()
    except Exception:
        logger.debug("Task store close failed.", exc_info=True)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except (TaskStoreError, ValueError) as e:
        logger.error("Cannot open task storage: %s", e)
        print(f"Cannot open task storage: {e}", file=sys.stderr)
        return 1

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
