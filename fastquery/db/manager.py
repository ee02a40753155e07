"""
Database wiring for FastAPI applications.
"""

from typing import Generator, Optional

from fastapi import FastAPI, Request
from sqlalchemy.orm import Session

from fastquery.config.base import BaseAppSettings
from fastquery.errors.exceptions import DBError
from fastquery.db.session import create_engine_from_settings, create_session_factory, session_scope
from fastquery.logging import Logger, ensure_logger


def setup_db(
    app: FastAPI,
    settings: BaseAppSettings,
    logger: Optional[Logger] = None,
) -> None:
    """
    Create the engine and session factory and keep them on ``app.state``.

    The engine is available as ``app.state.db_engine`` and should be
    disposed by the application on shutdown.
    """
    log = ensure_logger(logger, __name__, settings)

    engine = create_engine_from_settings(settings)
    app.state.db_engine = engine
    app.state.session_factory = create_session_factory(engine)
    log.info(f"Database engine initialized for {engine.url.render_as_string(hide_password=True)}")


def get_session(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session per request.
    """
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise DBError(message="Database not initialized")

    with session_scope(session_factory) as session:
        yield session
