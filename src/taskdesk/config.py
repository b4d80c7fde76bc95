# src/taskdesk/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every knob has a default, so a bare checkout runs with no environment at all.
- The database location is the only path the app writes to (plus its log file).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDESK"

PASSWORD_SCHEMES = ("bcrypt", "sha256")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    return v if v in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path

    # ---- Auth ----
    password_scheme: str
    bcrypt_rounds: int
    input_max_len: int

    # ---- Tasks ----
    owner_check: bool
    max_tasks: int
    title_max_len: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskdesk").strip() or "taskdesk"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdesk"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "users.db")

        password_scheme = _env_choice(_k("PASSWORD_SCHEME"), PASSWORD_SCHEMES, "bcrypt")
        # bcrypt accepts 4..31; clamp so a typo can't make every login take minutes.
        bcrypt_rounds = max(4, min(16, _env_int(_k("BCRYPT_ROUNDS"), 12)))
        input_max_len = max(1, _env_int(_k("INPUT_MAX_LEN"), 255))

        owner_check = _env_bool(_k("OWNER_CHECK"), False)
        max_tasks = max(1, _env_int(_k("MAX_TASKS"), 100))
        title_max_len = max(1, _env_int(_k("TITLE_MAX_LEN"), 255))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            password_scheme=password_scheme,
            bcrypt_rounds=bcrypt_rounds,
            input_max_len=input_max_len,
            owner_check=owner_check,
            max_tasks=max_tasks,
            title_max_len=title_max_len,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
