# src/taskdesk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- opens both stores on the same SQLite file and wires them into AppState.

Store constructors raise StoreInitError when the database can't be opened;
that is left to the caller (cli.main) to turn into an exit.
"""

from __future__ import annotations

import logging

from ..auth.auth_store import AuthStore
from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    auth = AuthStore(
        settings.db_path,
        password_scheme=settings.password_scheme,
        bcrypt_rounds=settings.bcrypt_rounds,
        input_max_len=settings.input_max_len,
    )
    tasks = TaskStore(
        settings.db_path,
        owner_check=settings.owner_check,
        max_tasks=settings.max_tasks,
        title_max_len=settings.title_max_len,
    )
    return AppState(settings=settings, auth=auth, tasks=tasks)
