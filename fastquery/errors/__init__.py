"""
Error handling module for FastQuery.

This module provides the exception hierarchy used by the search subsystem
and the FastAPI handlers that turn those exceptions into error responses.

Limitations:
- Error response structure is fixed; customization requires code changes.
- Only HTTP-style errors are supported (exceptions must inherit from AppError).
"""

from fastquery.errors.exceptions import (
    AppError,
    BadRequestError,
    DBError,
    InvalidArgumentError,
    NotFoundError,
    ValidationError,
)
from fastquery.errors.handlers import register_exception_handlers
from fastquery.errors.manager import setup_errors

__all__ = [
    "setup_errors",
    "register_exception_handlers",
    "AppError",
    "BadRequestError",
    "DBError",
    "InvalidArgumentError",
    "NotFoundError",
    "ValidationError",
]
