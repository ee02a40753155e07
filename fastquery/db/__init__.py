"""
Database integration: declarative base, engine and sessions.
"""

from fastquery.db.base import Base, BaseModel, metadata
from fastquery.db.manager import get_session, setup_db
from fastquery.db.session import (
    create_engine_from_settings,
    create_session_factory,
    get_db,
    session_scope,
)

__all__ = [
    "Base",
    "BaseModel",
    "metadata",
    "create_engine_from_settings",
    "create_session_factory",
    "get_db",
    "session_scope",
    "get_session",
    "setup_db",
]
