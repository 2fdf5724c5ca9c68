"""File logging setup.

The terminal is in raw mode while the app runs, so records go to a log file
under the per-user log directory instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import APP_NAME, LOG_FILENAME, log_dir

_logging_initialized: bool = False


def setup_logging(level: str = "WARNING", directory: Path | None = None) -> Path | None:
    """Attach a file handler to the package logger and return the log path.

    Idempotent: calls after the first return ``None``. When the log directory
    cannot be created a ``NullHandler`` is installed and ``None`` is returned.
    """
    global _logging_initialized

    logger = logging.getLogger(APP_NAME)
    if _logging_initialized:
        return None

    target_dir = directory if directory is not None else log_dir()
    log_path = target_dir / LOG_FILENAME
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
        log_path = None
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False

    _logging_initialized = True
    logger.debug("logging initialized at level %s", level)
    return log_path


def reset_logging() -> None:
    """Detach handlers installed by ``setup_logging``."""
    global _logging_initialized

    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    _logging_initialized = False
