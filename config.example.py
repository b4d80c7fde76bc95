# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use .env (local, gitignored) for overrides.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKDESK_APP_NAME": "App display name (default: taskdesk).",
    "TASKDESK_LOG_LEVEL": "Console log level (default: WARNING; the log file always gets DEBUG).",
    # Paths (gitignored)
    "TASKDESK_DATA_DIR": "Local data directory (default: .local/taskdesk).",
    "TASKDESK_DB_PATH": "SQLite file holding users + tasks (default: <data_dir>/users.db).",
    # Auth
    "TASKDESK_PASSWORD_SCHEME": "bcrypt (default) or sha256 (legacy unsalted digest).",
    "TASKDESK_BCRYPT_ROUNDS": "bcrypt cost factor, clamped to 4..16 (default: 12).",
    "TASKDESK_INPUT_MAX_LEN": "Max characters for username/password fields (default: 255).",
    # Tasks
    "TASKDESK_OWNER_CHECK": "Only let a user complete/delete their own tasks (true/false, default false).",
    "TASKDESK_MAX_TASKS": "Max tasks returned per listing; extra rows are left out (default: 100).",
    "TASKDESK_TITLE_MAX_LEN": "Max task title length (default: 255).",
}
