# src/taskdesk/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path

from ..core.errors import StoreInitError
from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store (table `tasks`), scoped by owner username.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Ownership:
    - with owner_check=False (default) mark_complete/delete_task act on any id
    - with owner_check=True they only touch rows owned by the given username

    Failures after startup are logged and reported as None / [] / no-op;
    nothing here raises into the UI except the constructor (StoreInitError).

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(
        self,
        db_path: str | Path = "users.db",
        *,
        owner_check: bool = False,
        max_tasks: int = 100,
        title_max_len: int = 255,
    ) -> None:
        self._db_path = Path(db_path)
        self.owner_check = bool(owner_check)
        self.max_tasks = max(1, int(max_tasks))
        self._title_max_len = int(title_max_len)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
            total = self._count_tasks()
        except (OSError, sqlite3.Error) as e:
            raise StoreInitError(self._db_path, str(e)) from e
        logger.info(
            "TaskStore ready db=%s total=%s owner_check=%s max_tasks=%s",
            self._db_path,
            total,
            self.owner_check,
            self.max_tasks,
        )

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY,
                    username TEXT,
                    title TEXT,
                    completed INTEGER
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("username", "TEXT")
            add_col("title", "TEXT")
            add_col("completed", "INTEGER DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_username ON tasks(username)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            owner_username=str(row["username"] or ""),
            title=str(row["title"] or ""),
            completed=TaskStatus.from_db(row["completed"]) is TaskStatus.COMPLETED,
        )

    def _scope(self, task_id: int, username: str | None) -> tuple[str, tuple] | None:
        """
        WHERE clause + params for a single-task mutation.

        Returns None when owner_check is on and no username was given.
        """
        if not self.owner_check:
            return "id = ?", (int(task_id),)
        if not username:
            return None
        return "id = ? AND username = ?", (int(task_id), username)

    def _mutate(self, action: str, sql_head: str, task_id: int, username: str | None) -> None:
        scope = self._scope(task_id, username)
        if scope is None:
            logger.warning("%s refused: owner_check is on and no username given id=%s", action, task_id)
            return
        where, params = scope
        try:
            conn = self._get_conn()
            try:
                cur = conn.execute(f"{sql_head} WHERE {where}", params)
                conn.commit()
                changed = cur.rowcount
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("%s failed id=%s", action, task_id)
            return
        logger.debug("%s id=%s user=%s rows=%s", action, task_id, username, changed)

    def _count_tasks(self, username: str | None = None) -> int:
        conn = self._get_conn()
        try:
            if username is None:
                (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            else:
                (n,) = conn.execute(
                    "SELECT COUNT(*) FROM tasks WHERE username = ?", (username,)
                ).fetchone()
            return int(n)
        finally:
            conn.close()

    # ---- public API ----

    def count_tasks(self, username: str | None = None) -> int:
        """Tasks owned by `username` (all tasks when None); 0 when the table can't be read."""
        try:
            return self._count_tasks(username)
        except sqlite3.Error:
            logger.exception("Count tasks failed user=%s", username)
            return 0

    def add_task(self, username: str, title: str) -> int | None:
        """
        Insert a pending task and return its id.

        Returns None if the input is rejected (no owner, blank or over-long
        title) or the insert fails.
        """
        title = (title or "").strip()
        if not username:
            logger.warning("add_task rejected: empty username")
            return None
        if not title or len(title) > self._title_max_len:
            logger.info("add_task rejected: bad title length=%s user=%s", len(title), username)
            return None

        try:
            conn = self._get_conn()
            try:
                cur = conn.execute(
                    "INSERT INTO tasks (username, title, completed) VALUES (?, ?, 0)",
                    (username, title),
                )
                conn.commit()
                rowid = cur.lastrowid
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("add_task failed user=%s", username)
            return None

        if rowid is None:
            logger.error("SQLite did not return lastrowid for tasks insert user=%s", username)
            return None
        task_id = int(rowid)
        logger.debug("Task added id=%s user=%s", task_id, username)
        return task_id

    def fetch_tasks(self, username: str, *, offset: int = 0) -> list[Task]:
        """
        Tasks owned by `username` in insertion order.

        At most `max_tasks` rows come back; anything past the cap is silently
        left out (oldest rows win). Pass `offset` to look past the cap.
        """
        if not username:
            return []
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute(
                    """
                    SELECT id, username, title, completed
                    FROM tasks
                    WHERE username = ?
                    ORDER BY id ASC
                        LIMIT ? OFFSET ?
                    """,
                    (username, self.max_tasks, max(0, int(offset))),
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("fetch_tasks failed user=%s", username)
            return []
        return [self._row_to_task(r) for r in rows]

    def mark_complete(self, task_id: int, *, username: str | None = None) -> None:
        """Set completed=1. Idempotent; unknown ids are a no-op."""
        self._mutate("mark_complete", "UPDATE tasks SET completed = 1", task_id, username)

    def delete_task(self, task_id: int, *, username: str | None = None) -> None:
        """Remove the row. Unknown ids are a no-op."""
        self._mutate("delete_task", "DELETE FROM tasks", task_id, username)
