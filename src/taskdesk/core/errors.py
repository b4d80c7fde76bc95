# src/taskdesk/core/errors.py

from __future__ import annotations


class StoreInitError(RuntimeError):
    """
    The database file could not be opened or its schema could not be created.

    This is the only fatal condition in the app: stores raise it from their
    constructor and cli.main turns it into a diagnostic + exit status 1.
    Everything after startup is reported as a failure value instead.
    """

    def __init__(self, db_path: object, reason: str) -> None:
        super().__init__(f"Cannot initialize database {db_path}: {reason}")
        self.db_path = db_path
        self.reason = reason
