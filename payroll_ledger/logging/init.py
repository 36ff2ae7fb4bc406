from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Console logging for the payroll CLI.

Every line on stdout starts with one of the labels INFO|WARN|ERROR|SUMMARY.
With --debug, DEBUG lines are shown too and name the emitting module
(``DEBUG [services.calculator] ...``) so a skipped row can be traced back.

Module loggers live under the "payroll_ledger" namespace and propagate into
the one handler installed here.
"""

__all__ = [
    "APP_LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
]

APP_LOGGER_NAME = "payroll_ledger"

# between INFO=20 and WARNING=30
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Render ``LABEL message``; DEBUG records from modules also carry the module path."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        if record.levelno == logging.DEBUG and record.name.startswith(APP_LOGGER_NAME + "."):
            return f"{label} [{_module_path(record.name)}] {record.getMessage()}"
        return f"{label} {record.getMessage()}"


def _module_path(name: str) -> str:
    return name[len(APP_LOGGER_NAME) + 1:]


def _apply_level(logger: logging.Logger, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def setup_logging(debug: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Configure the application logger.

    The handler is installed once; later calls only switch between INFO and
    DEBUG, so the CLI can call this again after parsing ``--debug``.

    Args:
        debug: show DEBUG lines
        stream: output for the handler on first setup (default: stdout)

    Returns:
        The "payroll_ledger" logger
    """
    global _logger

    if _logger is None:
        logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
        logger = logging.getLogger(APP_LOGGER_NAME)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(LabeledFormatter())
        logger.addHandler(handler)
        # root handlers would print every line twice
        logger.propagate = False
        _logger = logger

    _apply_level(_logger, debug)
    return _logger


def get_logger() -> logging.Logger:
    """The application logger, set up at INFO on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup_logging() starts over."""
    global _logger
    _logger = None
