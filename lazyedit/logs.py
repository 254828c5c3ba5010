"""Logging setup for an editor that owns the terminal.

Records go to a file only; writing them to stdout or stderr would corrupt
the raw-mode screen.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("debug", "info", "warning", "error")


def configure_logging(level: str, log_file: Path) -> logging.Handler:
    """Attach one handler to the ``lazyedit`` logger and return it.

    Falls back to a ``NullHandler`` when the log file cannot be opened so a
    read-only home directory never prevents editing.
    """
    logger = logging.getLogger("lazyedit")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    handler: logging.Handler
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return handler
