"""
FastAPI application factory module.

This module provides a function to configure FastAPI applications for
search endpoints: error handling, database sessions, the parameter
validator and the search service cache.
"""

from typing import Optional

from fastapi import FastAPI

from fastquery.config import BaseAppSettings, get_settings
from fastquery.db import setup_db
from fastquery.errors import setup_errors
from fastquery.logging import ensure_logger
from fastquery.query.supported import SupportedParamsRegistry
from fastquery.query.validator import QueryParamValidator
from fastquery.service.factory import SearchServiceFactory


def configure_app(
    app: FastAPI,
    settings: Optional[BaseAppSettings] = None,
    registry: Optional[SupportedParamsRegistry] = None,
) -> None:
    """
    Configure a FastAPI application for search endpoints.

    After configuration ``app.state`` holds ``settings``, ``validator``
    (a QueryParamValidator over ``registry``), ``search_services`` (a
    SearchServiceFactory), ``db_engine`` and ``session_factory``.

    Args:
        app: The FastAPI application to configure
        settings: Optional application settings, loaded from the
                 environment when not provided
        registry: Allow-list registry for the application's entities
    """
    app_settings = settings or get_settings()
    logger = ensure_logger(None, __name__, app_settings)

    if not app.title:
        app.title = app_settings.APP_NAME
    if not app.version:
        app.version = app_settings.VERSION

    app.debug = app_settings.DEBUG
    app.state.settings = app_settings

    # Configure error handling (required)
    setup_errors(app, app_settings, logger)
    # Configure database
    setup_db(app, app_settings, logger)

    app.state.validator = QueryParamValidator(
        registry or SupportedParamsRegistry(), settings=app_settings, logger=logger
    )
    app.state.search_services = SearchServiceFactory(logger=logger)
