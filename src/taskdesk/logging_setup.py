# src/taskdesk/logging_setup.py

"""
Log routing for the taskdesk console.

stderr shares the terminal with the REPL prompt, so it only gets WARNING and
above by default, and never the per-statement DEBUG lines the SQLite stores
write. taskdesk.log under the data dir gets everything, which is where a
failed login or a swallowed storage error can be looked up afterwards.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskdesk.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Decide what reaches the terminal:
    - taskdesk loggers pass, but the *_store modules only from INFO up
    - anything else (bcrypt, dotenv, py.warnings) only from ERROR up
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("taskdesk."):
            return record.levelno >= logging.ERROR
        if name.endswith("_store"):
            return record.levelno >= logging.INFO
        return True


def _console_handler(level: int, fmt: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.addFilter(_ConsoleNoiseFilter())
    return handler


def _file_handler(log_dir: Path, level: int, fmt: logging.Formatter) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskdesk",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Point the root logger at the console and at `<log_dir>/taskdesk.log`.

    Handlers already on the root logger are replaced, so running this again
    (tests, a second main() call) does not duplicate output. Returns the log
    file path. Raises OSError when the log directory can't be created.
    """
    log_dir = Path(log_dir)
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    file_handler = _file_handler(log_dir, file_level, fmt)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(_console_handler(console_level, fmt))
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_dir / LOG_FILE_NAME
