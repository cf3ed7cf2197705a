"""Logging configuration for ermodel."""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO
from .settings import get_settings

PACKAGE_LOGGER = "ermodel"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the package logger, replacing any handlers set up before.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: settings.log_level)
        log_file: Also write to this file (default: settings.log_file)
        format_string: Record format (default: DEFAULT_FORMAT)
        stream: Console stream (default: stdout; the CLI passes stderr)

    Returns:
        The configured package logger
    """
    settings = get_settings()
    numeric_level = logging.getLevelName((level or settings.log_level).upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level or settings.log_level}")
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    handlers = [logging.StreamHandler(stream or sys.stdout)]
    log_file_path = log_file or settings.log_file
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, encoding="utf-8"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    # keep records out of the application's root logger
    package_logger.propagate = False
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger under the ermodel hierarchy, configuring the package on first use.

    Args:
        name: Module name, usually __name__
    """
    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        setup_logging()

    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
