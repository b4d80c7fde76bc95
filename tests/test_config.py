# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskdesk.config import Settings

_VARS = (
    "APP_NAME",
    "LOG_LEVEL",
    "DATA_DIR",
    "DB_PATH",
    "PASSWORD_SCHEME",
    "BCRYPT_ROUNDS",
    "INPUT_MAX_LEN",
    "OWNER_CHECK",
    "MAX_TASKS",
    "TITLE_MAX_LEN",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for v in _VARS:
        monkeypatch.delenv(f"TASKDESK_{v}", raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.app_name == "taskdesk"
    assert s.data_dir == Path(".local/taskdesk")
    assert s.db_path == Path(".local/taskdesk") / "users.db"
    assert s.password_scheme == "bcrypt"
    assert s.bcrypt_rounds == 12
    assert s.owner_check is False
    assert s.max_tasks == 100
    assert s.input_max_len == 255
    assert s.title_max_len == 255


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKDESK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKDESK_OWNER_CHECK", "yes")
    monkeypatch.setenv("TASKDESK_MAX_TASKS", "10")
    monkeypatch.setenv("TASKDESK_PASSWORD_SCHEME", "SHA256")

    s = Settings.from_env()
    assert s.db_path == tmp_path / "users.db"
    assert s.owner_check is True
    assert s.max_tasks == 10
    assert s.password_scheme == "sha256"


def test_bad_values_fall_back_or_clamp(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKDESK_PASSWORD_SCHEME", "md5")
    monkeypatch.setenv("TASKDESK_BCRYPT_ROUNDS", "99")
    monkeypatch.setenv("TASKDESK_MAX_TASKS", "lots")

    s = Settings.from_env()
    assert s.password_scheme == "bcrypt"
    assert s.bcrypt_rounds == 16
    assert s.max_tasks == 100
