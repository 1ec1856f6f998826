# src/task_tree/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "task_tree.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Per-insert/delete and per-report debug lines; useful in the file, noise on screen.
_CHATTY_LOGGERS = frozenset({"task_tree.tasks.task_tree", "task_tree.tasks.active_report"})


class _ConsoleNoiseFilter(logging.Filter):
    """
    Decides what reaches the terminal next to the REPL prompt.

    Our own loggers pass through, except the tree/report internals which only
    show up from WARNING. Anything else (captured warnings, libraries) needs ERROR.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name in _CHATTY_LOGGERS:
            return record.levelno >= logging.WARNING
        if record.name.startswith("task_tree."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/task_tree",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install the two root handlers used by the CLI and return the log file path.

    stderr gets `console_level` records through _ConsoleNoiseFilter; the log file
    under `log_dir` gets everything from `file_level` up. Existing root handlers
    are replaced, so calling it again reconfigures rather than duplicates output.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(file_level)
    to_file.setFormatter(fmt)

    root.addHandler(console)
    root.addHandler(to_file)

    # warnings.warn() now lands in the 'py.warnings' logger.
    logging.captureWarnings(True)
    return log_file
