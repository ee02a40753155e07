"""
Exception handlers for FastAPI applications.

This module provides exception handlers that convert application exceptions
into standardized API responses using the schemas module. Besides AppError,
framework errors (request validation, pydantic validation, HTTPException)
and unexpected exceptions are rendered with the same ErrorResponse envelope.
"""

import traceback
from http import HTTPStatus
from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from fastquery.errors.exceptions import AppError
from fastquery.logging import Logger, ensure_logger
from fastquery.schemas import ErrorInfo, ErrorResponse

# Leading entries of a validation error location naming where the value came from
REQUEST_LOCATIONS = ("body", "query", "path", "header", "cookie")


def create_error_response(
    message: str,
    code: str = "ERROR",
    errors: Optional[list] = None,
) -> ErrorResponse:
    """
    Create a standardized error response.

    Args:
        message: Error message
        code: Error code identifier
        errors: Detailed error information list

    Returns:
        Standardized error response
    """
    return ErrorResponse(
        success=False,
        message=message,
        errors=errors or [ErrorInfo(code=code, message=message)],
    )


def _error_json(
    status_code: int, response: ErrorResponse, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=int(status_code),
        content=jsonable_encoder(response),
        headers=headers,
    )


def _create_validation_errors(
    errors_data: Iterable[Dict[str, Any]], strip_location: bool = False
) -> List[ErrorInfo]:
    """
    Create a list of ErrorInfo objects from validation errors data.

    Args:
        errors_data: Error dictionaries as returned by ``exc.errors()``
        strip_location: Drop the leading request location (``query``,
            ``body``...) from the field path

    Returns:
        List of ErrorInfo objects
    """
    errors = []

    for error in errors_data:
        loc = [str(item) for item in error.get("loc", ())]
        if strip_location and loc and loc[0] in REQUEST_LOCATIONS:
            loc = loc[1:]

        errors.append(
            ErrorInfo(
                code="VALIDATION_ERROR",
                message=error.get("msg", "Validation error"),
                field=".".join(loc) or None,
            )
        )

    return errors


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Handler for AppError and its subclasses.

    Args:
        request: FastAPI request
        exc: AppError instance

    Returns:
        JSON response with error details
    """
    errors = [
        ErrorInfo(
            code=exc.code,
            message=exc.message,
            field=getattr(exc, "field", None),
            details=exc.details or None,
        )
    ]

    # Field validation errors replace the generic entry
    if getattr(exc, "fields", None):
        errors = [
            ErrorInfo(
                code=field_error.get("code", exc.code),
                message=field_error.get("message", exc.message),
                field=field_error.get("field", ""),
            )
            for field_error in exc.fields
        ]

    response = create_error_response(message=exc.message, code=exc.code, errors=errors)
    return _error_json(exc.status_code, response)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handler for FastAPI's RequestValidationError.

    Out-of-range pagination values such as ``page=-1`` end up here. Field
    paths are reported without their request location (``page`` rather
    than ``query.page``).
    """
    response = create_error_response(
        message="Request validation error",
        code="VALIDATION_ERROR",
        errors=_create_validation_errors(exc.errors(), strip_location=True),
    )
    return _error_json(HTTPStatus.UNPROCESSABLE_ENTITY, response)


async def pydantic_validation_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """Handler for pydantic ValidationError, e.g. a mapper rejecting an entity."""
    response = create_error_response(
        message="Data validation error",
        code="VALIDATION_ERROR",
        errors=_create_validation_errors(exc.errors()),
    )
    return _error_json(HTTPStatus.UNPROCESSABLE_ENTITY, response)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handler for HTTPException, including the router's 404 and 405 responses.

    The error code is the HTTP status name, e.g. ``NOT_FOUND``.
    """
    try:
        code = HTTPStatus(exc.status_code).name
    except ValueError:
        code = "HTTP_ERROR"

    message = exc.detail if isinstance(exc.detail, str) else code.replace("_", " ").capitalize()
    response = create_error_response(message=message, code=code)
    return _error_json(exc.status_code, response, headers=getattr(exc, "headers", None))


def register_exception_handlers(
    app: FastAPI, logger: Optional[Logger] = None, debug: bool = False
) -> None:
    """
    Register all exception handlers with a FastAPI application.

    Args:
        app: FastAPI application instance
        logger: Optional logger for unhandled exceptions
        debug: Include exception details in responses for unhandled errors
    """
    log = ensure_logger(logger, __name__)

    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            log.error(f"{exc.code}: {exc.message}")
        else:
            log.debug(f"{exc.code}: {exc.message}")
        return await app_error_handler(request, exc)

    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        log.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")
        message = str(exc) if debug else "An unexpected error occurred"
        response = create_error_response(message=message, code="INTERNAL_ERROR")
        return _error_json(status.HTTP_500_INTERNAL_SERVER_ERROR, response)

    app.add_exception_handler(AppError, handle_app_error)

    # Framework exceptions
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, pydantic_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.add_exception_handler(Exception, handle_unexpected)
