# src/taskdesk/cli/main.py

"""
CLI entrypoint.

Initializes logging, opens the database (fatal if that fails), then runs the
console REPL in the main thread.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.errors import StoreInitError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    for name in ("auth", "tasks"):
        try:
            store = getattr(state, name, None)
            if store is not None and hasattr(store, "close"):
                store.close()
        except Exception:
            logger.debug("%s close failed.", name, exc_info=True)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_dir = getattr(settings, "data_dir", ".local/taskdesk")
    try:
        setup_logging(log_dir=log_dir, console_level=console_level)
    except OSError as e:
        print(f"Failed to set up logging in {log_dir}: {e}", file=sys.stderr)
        return 1

    logger.info("Starting %s...", getattr(settings, "app_name", "taskdesk"))

    try:
        state = create_initial_state(settings=settings)
    except (StoreInitError, OSError) as e:
        logger.critical("Startup failed: %s", e)
        print(f"Failed to open database: {e}", file=sys.stderr)
        return 1

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
