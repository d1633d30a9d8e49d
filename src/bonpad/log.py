"""Logging setup.

The screen belongs to the editor while it runs, so log records go to a
file or nowhere - never to the terminal.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "bonpad"

# Format: 2026-01-01 19:42:59   dispatcher.py   handle   88   Message
LOG_FORMAT = '%(asctime)s   %(filename)s   %(funcName)s   %(lineno)d   %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(path: Optional[Path] = None, level: int = logging.WARNING) -> logging.Logger:
    """Attach a single handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)

    # Calling twice (tests, repeated CLI invocations) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(level)
    logger.propagate = False

    if path is None:
        logger.addHandler(logging.NullHandler())
        return logger

    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
