"""
Basic logging configuration for FastQuery.

This module provides a simple and consistent logging setup that the
search components use when no logger is injected.
"""

import logging
import sys
from typing import Any, Optional

from fastquery.logging.formatters import JsonFormatter

# Type alias for Python's standard logger
Logger = logging.Logger


def setup_logger(
    name: str,
    level: str = "INFO",
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    debug: bool = False,
    json_format: bool = False,
) -> logging.Logger:
    """
    Create and configure a logger instance.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log message format (ignored if json_format=True)
        debug: If True, sets level to DEBUG regardless of level parameter
        json_format: If True, outputs logs in JSON format

    Returns:
        Configured logger instance
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if debug:
        log_level = logging.DEBUG

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers.clear()

    formatter = JsonFormatter() if json_format else logging.Formatter(format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str, settings: Optional[Any] = None) -> logging.Logger:
    """
    Get a configured logger instance.

    Level and output format are taken from the settings when given
    (LOG_LEVEL, LOG_JSON_FORMAT and DEBUG).

    Args:
        name: Logger name (usually __name__)
        settings: Optional application settings

    Returns:
        Configured logger instance
    """
    level = str(getattr(settings, "LOG_LEVEL", "INFO"))
    json_format = bool(getattr(settings, "LOG_JSON_FORMAT", False))
    debug = bool(getattr(settings, "DEBUG", False))

    return setup_logger(name, level=level, debug=debug, json_format=json_format)


def ensure_logger(
    logger: Optional[logging.Logger] = None,
    name: Optional[str] = None,
    settings: Optional[Any] = None,
) -> logging.Logger:
    """
    Return the provided logger, or create one for ``name``.

    Args:
        logger: An existing logger instance to use if provided
        name: Module name (usually __name__) for creating a new logger if needed
        settings: Optional application settings

    Returns:
        Either the provided logger or a newly created one

    Raises:
        ValueError: If neither a logger nor a name is given
    """
    if logger:
        return logger

    if not name:
        raise ValueError("Module name must be provided when logger is not specified")

    return get_logger(name, settings)
