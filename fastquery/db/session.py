"""
Engine and session management.

Repositories run on a synchronous SQLAlchemy Session. ``session_scope``
commits on success, rolls back on failure and converts database errors
into DBError; ``get_db`` is the FastAPI dependency equivalent.
"""

from contextlib import contextmanager
from typing import Any, Callable, Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fastquery.errors.exceptions import DBError
from fastquery.logging import Logger, ensure_logger


def create_engine_from_settings(settings: Any, **kwargs: Any) -> Engine:
    """
    Create an engine from ``settings.DATABASE_URL`` and ``settings.DB_ECHO``.

    In-memory SQLite databases share one connection so that every session
    sees the same data.
    """
    url = settings.DATABASE_URL
    options = {"echo": bool(getattr(settings, "DB_ECHO", False))}

    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True

    options.update(kwargs)
    return create_engine(url, **options)


def create_session_factory(engine: Engine) -> Callable[[], Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(
    engine_or_factory: Any, logger: Optional[Logger] = None
) -> Generator[Session, None, None]:
    """
    Provide a transactional session.

    Args:
        engine_or_factory: An Engine, or a session factory returned by
            ``create_session_factory``
        logger: Optional logger

    Raises:
        DBError: If the database raises during the scope or on commit
    """
    log = ensure_logger(logger, __name__)
    factory = (
        create_session_factory(engine_or_factory)
        if isinstance(engine_or_factory, Engine)
        else engine_or_factory
    )
    session = factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        log.error(f"Database error, transaction rolled back: {e}")
        raise DBError(message=str(e), details={"error": str(e)})
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db(session_factory: Callable[[], Session]) -> Callable[[], Generator[Session, None, None]]:
    """
    Build a FastAPI dependency yielding a session from ``session_factory``.

    Example:
        ```python
        get_session = get_db(create_session_factory(engine))

        @app.get("/products")
        def list_products(session: Session = Depends(get_session)):
            ...
        ```
    """

    def dependency() -> Generator[Session, None, None]:
        with session_scope(session_factory) as session:
            yield session

    return dependency
