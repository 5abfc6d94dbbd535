"""Logging helpers for the package."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


_DEFAULT_LOG = Path.home() / ".statusbar_keyboard.log"


def setup(
    level: int | str = logging.INFO,
    log_file: str | Path | None = None,
    console: bool = True,
) -> None:
    """Configure logging for the package.

    Parameters
    ----------
    level:
        Minimum severity level for log messages, as a number or a name
        such as ``"DEBUG"``.
    log_file:
        Optional path to the log file.  If not provided,
        ``~/.statusbar_keyboard.log`` is used.
    console:
        Also log to stderr.  Turned off while curses owns the terminal.
    """

    if log_file is None:
        log_file = _DEFAULT_LOG
    else:
        log_file = Path(log_file)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler())
    try:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        handlers.append(file_handler)
    except OSError:
        # Fall back to console-only logging if the file can't be opened.
        if not console:
            handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )

    def _excepthook(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).critical(
            "Unhandled exception", exc_info=(exc_type, exc, tb)
        )

    sys.excepthook = _excepthook
