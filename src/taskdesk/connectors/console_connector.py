# src/taskdesk/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import add_title, render_state
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..ui.screens import Screen

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _prompt(state: AppState) -> str:
    user = state.model.current_user
    return f"{user}> " if user else f"{state.model.screen.value}> "


def run_console_loop(state: AppState) -> None:
    """
    Line-based front-end for the screen machine.

    Slash commands go through the command registry. On the dashboard, a plain
    line is taken as a new task title.
    """
    logger.info("Console connector started db=%s", getattr(state.settings, "db_path", "?"))
    app_name = str(getattr(state.settings, "app_name", "taskdesk"))
    _print_ts(f"[{app_name}] Use /help for commands. Use /exit to quit.")
    print(render_state(state))

    while True:
        try:
            user_input = input(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input)
            if response is None:
                if state.model.screen is Screen.DASHBOARD:
                    response = add_title(state, user_input)
                else:
                    response = "Commands start with '/'. Use /help to list them."
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        print(response)

    logger.info("Console connector finished.")
