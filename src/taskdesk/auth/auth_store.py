# src/taskdesk/auth/auth_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path

from ..core.errors import StoreInitError
from .auth_models import AuthOutcome, AuthResult
from .passwords import make_password_hash, needs_rehash, verify_login

logger = logging.getLogger(__name__)


class AuthStore:
    """
    SQLite account store (table `users`).

    register/login never raise: every outcome, including SQLite failures,
    comes back as an AuthResult. Only the constructor raises (StoreInitError)
    because a database that can't be opened at startup is fatal.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(
        self,
        db_path: str | Path = "users.db",
        *,
        password_scheme: str = "bcrypt",
        bcrypt_rounds: int = 12,
        input_max_len: int = 255,
    ) -> None:
        self._db_path = Path(db_path)
        self._scheme = password_scheme
        self._rounds = int(bcrypt_rounds)
        self._input_max_len = int(input_max_len)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
            total = self._count_users()
        except (OSError, sqlite3.Error) as e:
            raise StoreInitError(self._db_path, str(e)) from e
        logger.info("AuthStore ready db=%s users=%s scheme=%s", self._db_path, total, self._scheme)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY,
                    username TEXT UNIQUE,
                    password TEXT
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def _valid_input(self, username: str, password: str) -> bool:
        if not username or not password:
            return False
        return len(username) <= self._input_max_len and len(password) <= self._input_max_len

    def _upgrade_hash(self, username: str, password: str) -> None:
        new_hash = make_password_hash(password, scheme=self._scheme, rounds=self._rounds)
        try:
            conn = self._get_conn()
            try:
                conn.execute("UPDATE users SET password = ? WHERE username = ?", (new_hash, username))
                conn.commit()
            finally:
                conn.close()
            logger.info("Upgraded legacy password hash user=%s scheme=%s", username, self._scheme)
        except sqlite3.Error:
            # The old digest still verifies, so the login itself stands.
            logger.exception("Password hash upgrade failed user=%s", username)

    def _count_users(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM users").fetchone()
            return int(n)
        finally:
            conn.close()

    # ---- public API ----

    def count_users(self) -> int:
        """Number of accounts; 0 when the table can't be read."""
        try:
            return self._count_users()
        except sqlite3.Error:
            logger.exception("Count users failed")
            return 0

    def register(self, username: str, password: str) -> AuthResult:
        username = (username or "").strip()
        password = password or ""
        if not self._valid_input(username, password):
            logger.debug("Register rejected: invalid input")
            return AuthResult.failure(AuthOutcome.INVALID_INPUT)

        pw_hash = make_password_hash(password, scheme=self._scheme, rounds=self._rounds)
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    "INSERT INTO users (username, password) VALUES (?, ?)",
                    (username, pw_hash),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.IntegrityError:
            logger.info("Register rejected: username taken user=%s", username)
            return AuthResult.failure(AuthOutcome.USERNAME_TAKEN)
        except sqlite3.Error:
            logger.exception("Register failed user=%s", username)
            return AuthResult.failure(AuthOutcome.STORAGE_ERROR)

        logger.info("User registered user=%s", username)
        return AuthResult.success(username)

    def login(self, username: str, password: str) -> AuthResult:
        """
        Check credentials.

        Unknown username and wrong password produce the same result, and every
        attempt costs one bcrypt check whatever the scheme or stored format.
        """
        username = (username or "").strip()
        password = password or ""
        if not username or not password:
            return AuthResult.failure(AuthOutcome.AUTHENTICATION_FAILED)

        try:
            conn = self._get_conn()
            try:
                row = conn.execute(
                    "SELECT password FROM users WHERE username = ?", (username,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("Login lookup failed user=%s", username)
            return AuthResult.failure(AuthOutcome.STORAGE_ERROR)

        stored = row["password"] if row is not None else None
        if not verify_login(password, stored, rounds=self._rounds):
            logger.info("Login rejected user=%s", username)
            return AuthResult.failure(AuthOutcome.AUTHENTICATION_FAILED)

        if needs_rehash(stored, scheme=self._scheme):
            self._upgrade_hash(username, password)

        logger.info("Login ok user=%s", username)
        return AuthResult.success(username)
