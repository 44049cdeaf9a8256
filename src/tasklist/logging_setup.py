# src/tasklist/logging_setup.py

"""
Logging for the tasklist console.

The REPL prints the result of every command itself, so stderr only carries
what the user has to notice (a store that cannot be read, a crashed command).
Everything, down to DEBUG, goes to <data_dir>/tasklist.log.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tasklist.log"

_LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Decide which records reach stderr, where they interleave with the task list.

    Store modules (tasklist.tasks.*) log every read and write; only their
    warnings are shown. The rest of tasklist passes. Anything else, including
    captured warnings.warn() calls, has to be an error to get through.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith("tasklist.tasks."):
            return record.levelno >= logging.WARNING
        if name.startswith("tasklist."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Attach a filtered stderr handler and a log file handler to the root logger.

    Called once from main() before the store is opened. Handlers left over from
    an earlier call are replaced. Returns the path of the log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(file_level)
    to_file.setFormatter(fmt)
    root.addHandler(to_file)

    logging.captureWarnings(True)

    return log_file
