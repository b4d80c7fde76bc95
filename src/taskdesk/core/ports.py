# src/taskdesk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the UI layer.

The screen machine depends on Protocols instead of the SQLite stores,
which keeps it testable with in-memory fakes.
"""

from typing import Any, Protocol


class AuthRepo(Protocol):
    def register(self, username: str, password: str) -> Any: ...  # AuthResult
    def login(self, username: str, password: str) -> Any: ...  # AuthResult


class TaskRepo(Protocol):
    owner_check: bool
    max_tasks: int

    def add_task(self, username: str, title: str) -> int | None: ...
    def fetch_tasks(self, username: str, *, offset: int = 0) -> list[Any]: ...
    def count_tasks(self, username: str | None = None) -> int: ...
    def mark_complete(self, task_id: int, *, username: str | None = None) -> None: ...
    def delete_task(self, task_id: int, *, username: str | None = None) -> None: ...
