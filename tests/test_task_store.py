# tests/test_task_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from taskdesk.core.errors import StoreInitError
from taskdesk.tasks.task_models import TaskStatus
from taskdesk.tasks.task_store import TaskStore


def test_add_then_fetch(task_store: TaskStore) -> None:
    task_id = task_store.add_task("alice", "buy milk")
    assert task_id is not None and task_id > 0

    tasks = task_store.fetch_tasks("alice")
    assert len(tasks) == 1
    assert tasks[0].id == task_id
    assert tasks[0].title == "buy milk"
    assert tasks[0].owner_username == "alice"
    assert tasks[0].completed is False
    assert tasks[0].status is TaskStatus.PENDING


def test_fetch_keeps_insertion_order_and_allows_duplicate_titles(task_store: TaskStore) -> None:
    ids = [task_store.add_task("alice", t) for t in ("b", "a", "b")]
    assert [t.id for t in task_store.fetch_tasks("alice")] == ids
    assert [t.title for t in task_store.fetch_tasks("alice")] == ["b", "a", "b"]


def test_mark_complete_is_one_way_and_idempotent(task_store: TaskStore) -> None:
    task_id = task_store.add_task("alice", "buy milk")
    assert task_id is not None

    task_store.mark_complete(task_id)
    (t,) = task_store.fetch_tasks("alice")
    assert t.completed is True
    assert t.status is TaskStatus.COMPLETED

    task_store.mark_complete(task_id)
    (t2,) = task_store.fetch_tasks("alice")
    assert t2 == t


def test_delete_task_and_unknown_ids_are_noops(task_store: TaskStore) -> None:
    keep = task_store.add_task("alice", "keep")
    drop = task_store.add_task("alice", "drop")
    assert keep is not None and drop is not None

    task_store.delete_task(drop)
    assert [t.id for t in task_store.fetch_tasks("alice")] == [keep]

    # Nonexistent ids: nothing raised, nothing changed.
    task_store.delete_task(drop)
    task_store.delete_task(9999)
    task_store.mark_complete(9999)
    assert [t.id for t in task_store.fetch_tasks("alice")] == [keep]


def test_fetch_is_scoped_to_owner(task_store: TaskStore) -> None:
    task_store.add_task("alice", "alice 1")
    task_store.add_task("bob", "bob 1")
    task_store.add_task("alice", "alice 2")

    assert {t.owner_username for t in task_store.fetch_tasks("bob")} == {"bob"}
    assert [t.title for t in task_store.fetch_tasks("alice")] == ["alice 1", "alice 2"]
    assert task_store.fetch_tasks("carol") == []
    assert task_store.fetch_tasks("") == []
    assert task_store.count_tasks("alice") == 2
    assert task_store.count_tasks() == 3


@pytest.mark.parametrize(("username", "title"), [("", "x"), ("alice", ""), ("alice", "   "), ("alice", "t" * 256)])
def test_add_task_rejects_bad_input(task_store: TaskStore, username: str, title: str) -> None:
    assert task_store.add_task(username, title) is None
    assert task_store.count_tasks() == 0


def test_fetch_cap_truncates_newest_and_offset_pages(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "users.db", max_tasks=3)
    ids = [store.add_task("alice", f"task {i}") for i in range(5)]

    first = store.fetch_tasks("alice")
    assert [t.id for t in first] == ids[:3]
    assert [t.id for t in store.fetch_tasks("alice", offset=3)] == ids[3:]
    assert store.count_tasks("alice") == 5


def test_without_owner_check_any_user_can_mutate(task_store: TaskStore) -> None:
    task_id = task_store.add_task("alice", "alice's")
    assert task_id is not None
    task_store.mark_complete(task_id, username="bob")
    assert task_store.fetch_tasks("alice")[0].completed is True
    task_store.delete_task(task_id, username="bob")
    assert task_store.fetch_tasks("alice") == []


def test_owner_check_blocks_cross_user_mutation(tmp_path: Path) -> None:
    store = TaskStore(tmp_path / "users.db", owner_check=True)
    task_id = store.add_task("alice", "alice's")
    assert task_id is not None

    store.mark_complete(task_id, username="bob")
    store.delete_task(task_id, username="bob")
    store.delete_task(task_id)
    (t,) = store.fetch_tasks("alice")
    assert t.completed is False

    store.mark_complete(task_id, username="alice")
    assert store.fetch_tasks("alice")[0].completed is True
    store.delete_task(task_id, username="alice")
    assert store.fetch_tasks("alice") == []


def test_schema_migration_adds_missing_completed_column(tmp_path: Path) -> None:
    db = tmp_path / "users.db"
    conn = sqlite3.connect(str(db))
    try:
        conn.execute("CREATE TABLE tasks (id INTEGER PRIMARY KEY, username TEXT, title TEXT)")
        conn.execute("INSERT INTO tasks (username, title) VALUES ('alice', 'old')")
        conn.commit()
    finally:
        conn.close()

    store = TaskStore(db)
    (old,) = store.fetch_tasks("alice")
    assert old.title == "old"
    assert old.completed is False

    store.mark_complete(old.id)
    assert store.fetch_tasks("alice")[0].completed is True


def test_storage_errors_are_swallowed(task_store: TaskStore, settings) -> None:
    conn = sqlite3.connect(str(settings.db_path))
    try:
        conn.execute("DROP TABLE tasks")
        conn.commit()
    finally:
        conn.close()

    assert task_store.add_task("alice", "x") is None
    assert task_store.fetch_tasks("alice") == []
    task_store.mark_complete(1)
    task_store.delete_task(1)


def test_count_tasks_returns_zero_on_storage_error(state) -> None:
    state.auth.register("alice", "pw")
    state.tasks.add_task("alice", "x")
    assert state.tasks.count_tasks("alice") == 1

    conn = sqlite3.connect(str(state.settings.db_path))
    try:
        conn.execute("DROP TABLE tasks")
        conn.commit()
    finally:
        conn.close()

    assert state.tasks.count_tasks("alice") == 0
    assert state.tasks.count_tasks() == 0


def test_unopenable_database_raises_store_init_error(tmp_path: Path) -> None:
    with pytest.raises(StoreInitError):
        TaskStore(tmp_path)


def test_shared_file_with_auth_store(state) -> None:
    assert state.auth.register("alice", "pw")
    assert state.tasks.add_task("alice", "t") is not None
    conn = sqlite3.connect(str(state.settings.db_path))
    try:
        tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    finally:
        conn.close()
    assert {"users", "tasks"} <= tables
