"""Logging setup for the facetheme command line."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

__all__ = ["LOG_DIR_ENV", "setup_logging", "get_log_path"]

LOG_DIR_ENV = "FACETHEME_LOG_DIR"
LOG_FILE_NAME = "facetheme.log"
_PACKAGE_LOGGER = "facetheme"
_HANDLER_NAME = "facetheme-cli"
_QUIET_LOGGERS: tuple[str, ...] = ("ruamel", "jsonschema")
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_PATH: Path | None = None


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
) -> Path | None:
    """Attach handlers for a single facetheme run to the ``facetheme`` logger.

    Console records go to stderr, leaving stdout to command output, and stay
    at WARNING unless ``level`` is DEBUG. A log file is appended to only when
    ``log_dir`` or ``FACETHEME_LOG_DIR`` names a directory. Handlers installed
    by an earlier call are replaced, so repeated runs in one process do not
    duplicate output. Returns the log file path, if any.
    """

    global _LOG_PATH
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.set_name(_HANDLER_NAME)
        console_handler.setLevel(level if level <= logging.DEBUG else logging.WARNING)
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    _LOG_PATH = None
    target_dir = log_dir or os.environ.get(LOG_DIR_ENV)
    if target_dir:
        directory = Path(target_dir).expanduser()
        directory.mkdir(parents=True, exist_ok=True)
        _LOG_PATH = directory / LOG_FILE_NAME
        file_handler = logging.FileHandler(_LOG_PATH, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return _LOG_PATH


def get_log_path() -> Path | None:
    """Return the log file of the most recent :func:`setup_logging` call."""

    return _LOG_PATH
