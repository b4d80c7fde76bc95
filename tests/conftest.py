# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdesk.auth.auth_store import AuthStore
from taskdesk.core.state import AppState
from taskdesk.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the stores.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskdesk-test",
        data_dir=tmp_path,
        db_path=tmp_path / "users.db",
        # Lowest bcrypt cost keeps the suite fast.
        password_scheme="bcrypt",
        bcrypt_rounds=4,
        input_max_len=255,
        owner_check=False,
        max_tasks=100,
        title_max_len=255,
    )


@pytest.fixture()
def auth_store(settings: SimpleNamespace) -> AuthStore:
    return AuthStore(
        settings.db_path,
        password_scheme=settings.password_scheme,
        bcrypt_rounds=settings.bcrypt_rounds,
        input_max_len=settings.input_max_len,
    )


@pytest.fixture()
def task_store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(
        settings.db_path,
        owner_check=settings.owner_check,
        max_tasks=settings.max_tasks,
        title_max_len=settings.title_max_len,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, auth_store: AuthStore, task_store: TaskStore) -> AppState:
    """
    AppState wired with the real SQLite stores on a tmp file.

    Both stores share one database file, the same way bootstrap wires them.
    """
    return AppState(settings=settings, auth=auth_store, tasks=task_store)
