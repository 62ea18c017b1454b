#!/usr/bin/env python3
"""
Logging configuration for k3s-wordpress.

Console output uses bracketed level tags ([INFO], [SUCCESS], [WARNING],
[ERROR]), colored when the stream is a terminal. A SUCCESS level sits
between INFO and WARNING for step completion messages.
"""

import logging
import sys
from typing import Any, TextIO

__version__ = "0.1.0"
__author__ = "John Ayers"

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_COLORS = {
    logging.DEBUG: "\033[0;36m",
    logging.INFO: "\033[0;34m",
    SUCCESS: "\033[0;32m",
    logging.WARNING: "\033[1;33m",
    logging.ERROR: "\033[0;31m",
    logging.CRITICAL: "\033[0;31m",
}
_RESET = "\033[0m"


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "logger",
        "description": "Logging configuration",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-18",
    }


class ConsoleFormatter(logging.Formatter):
    """Formatter that prefixes messages with a bracketed level tag.

    In verbose mode the timestamp and logger name are included as well.
    """

    def __init__(self, use_color: bool = False, verbose: bool = False) -> None:
        if verbose:
            fmt = "%(asctime)s - %(name)s - %(tag)s %(message)s"
        else:
            fmt = "%(tag)s %(message)s"
        super().__init__(fmt, datefmt="%Y-%m-%d %H:%M:%S")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        tag = f"[{record.levelname}]"
        if self.use_color:
            tag = f"{_COLORS.get(record.levelno, '')}{tag}{_RESET}"
        record.tag = tag
        return super().format(record)


def setup_logger(
    name: str = "k3s_wordpress",
    verbose: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure and return a logger instance.

    Module loggers (``logging.getLogger(__name__)``) propagate to this one,
    so configuring the package logger once covers the whole tool.

    Args:
        name: Logger name
        verbose: If True, set level to DEBUG; otherwise INFO
        stream: Output stream (default: stdout)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    output = stream or sys.stdout
    use_color = hasattr(output, "isatty") and output.isatty()

    # Replace rather than stack handlers when called again
    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)

    handler = logging.StreamHandler(output)
    handler.setLevel(level)
    handler.setFormatter(ConsoleFormatter(use_color=use_color, verbose=verbose))
    logger.addHandler(handler)

    return logger


def log_success(logger: logging.Logger, message: str) -> None:
    """Log a message at SUCCESS level.

    Args:
        logger: Logger instance
        message: Message to log
    """
    logger.log(SUCCESS, message)


def log_operation(
    logger: logging.Logger,
    operation: str,
    details: dict[str, Any] | None = None,
    level: int = logging.INFO,
) -> None:
    """Log an operation with structured details.

    Args:
        logger: Logger instance
        operation: Operation description
        details: Optional dictionary of details
        level: Logging level
    """
    message = f"{operation}"
    if details:
        detail_str = ", ".join(f"{k}={v}" for k, v in details.items())
        message = f"{message} ({detail_str})"

    logger.log(level, message)


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
