"""
Error management functionality for FastAPI applications.

This module provides the main entry point for configuring error handling
in a FastAPI application.
"""

from typing import Optional

from fastapi import FastAPI

from fastquery.config.base import BaseAppSettings
from fastquery.errors.handlers import register_exception_handlers
from fastquery.logging import Logger, ensure_logger


def setup_errors(
    app: FastAPI,
    settings: Optional[BaseAppSettings] = None,
    logger: Optional[Logger] = None,
) -> None:
    """
    Configure error handling for a FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Optional application settings
        logger: Optional logger for logging exceptions
    """
    log = ensure_logger(logger, __name__, settings)

    debug = False
    if settings and hasattr(settings, "DEBUG"):
        debug = bool(settings.DEBUG)

    register_exception_handlers(app, logger=log, debug=debug)
