"""
Logging configuration for ACE scan log analysis.

The terminal report is produced with ``logger.info`` calls, so the package
logger doubles as the report printer. Records below WARNING (the report and
progress lines) go to the output stream; warnings and errors go to the
error stream, so ``--quiet`` hides the report but never a failure and a
redirected report never swallows an error message.

Usage:
    from ace_scan_analyzer.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Analyzing log file: %s", path)
"""

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "ace_scan_analyzer"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(message)s"

_configured: bool = False


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below ``level``."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def configure_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
    error_stream: Optional[TextIO] = None,
    simple_mode: bool = True,
) -> None:
    """
    Configure the package logger with split report/error output.

    Args:
        level: Logging level (default: INFO).
        format_string: Custom format string. If None, uses SIMPLE_FORMAT
            or DEFAULT_FORMAT based on simple_mode.
        stream: Destination of report and debug lines (default: sys.stdout).
        error_stream: Destination of warnings and errors (default: sys.stderr).
        simple_mode: If True, emit bare messages so the report reads like
            plain terminal output.
    """
    global _configured

    if format_string is None:
        format_string = SIMPLE_FORMAT if simple_mode else DEFAULT_FORMAT
    formatter = logging.Formatter(format_string)

    out_handler = logging.StreamHandler(stream or sys.stdout)
    out_handler.setFormatter(formatter)
    out_handler.addFilter(_BelowLevelFilter(logging.WARNING))

    err_handler = logging.StreamHandler(error_stream or sys.stderr)
    err_handler.setFormatter(formatter)
    err_handler.setLevel(logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.addHandler(out_handler)
    package_logger.addHandler(err_handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a module of this package, configuring defaults on first use."""
    if not _configured:
        configure_logging()
    return logging.getLogger(name)


def set_level(level: int) -> None:
    """Set the logging level for all ace_scan_analyzer loggers."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def enable_debug() -> None:
    """Show debug lines along with the report."""
    set_level(logging.DEBUG)


def enable_quiet() -> None:
    """Hide the report; warnings and errors stay visible."""
    set_level(logging.WARNING)
