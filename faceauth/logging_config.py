"""Logging setup shared by every faceauth module.

Records are written to stdout as ``timestamp | LEVEL | module | message``.
Level names are colored only when stdout is a terminal; file output is
always plain.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}


class ColoredFormatter(logging.Formatter):
    """Formatter that highlights level and logger name on a terminal.

    The record is copied before it is decorated, so other handlers on the
    same logger still see the undecorated level name.
    """

    RESET = "\033[0m"
    BOLD = "\033[1m"

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: str = DATE_FORMAT, use_color: Optional[bool] = None):
        super().__init__(fmt, datefmt=datefmt)
        if use_color is None:
            use_color = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname)
        if self.use_color and color:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{self.BOLD}{record.levelname}{self.RESET}"
            record.name = f"{self.BOLD}{record.name}{self.RESET}"

        return super().format(record)


def _resolve_level(level: Optional[str]) -> int:
    if level is None:
        try:
            from faceauth.config import get_config

            level = get_config().log_level
        except ValueError:
            level = "INFO"

    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    name: str = "faceauth",
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Attach the faceauth handlers to a logger, once.

    Args:
        name: Logger name, normally the module's ``__name__``
        level: Level name; when None, LOG_LEVEL from Config is used
        log_file: Optional path that also receives uncolored records

    Returns:
        The configured logger. A logger that already has handlers is
        returned unchanged.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_level(level))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the configured logger for a module."""
    return setup_logging(name)
