"""
Configuration module for FastQuery.

This module provides:
- BaseAppSettings: The base class for application settings, supporting environment variable loading.
- Environment-specific settings (development, testing, production).
- get_settings: Factory for loading the correct settings class based on APP_ENV.

Example environment variables:

APP_NAME="FastQuery"
APP_ENV="development"  # Options: development, testing, production
DEBUG=true
DATABASE_URL="postgresql+psycopg://<username>:<password>@<host>:<port>/<database_name>"
DB_ECHO=false
DEFAULT_SORT_FIELD="created_at"
LOG_LEVEL="INFO"
LOG_JSON_FORMAT=false
"""

from .base import BaseAppSettings
from .development import DevelopmentSettings
from .production import ProductionSettings
from .settings import get_settings
from .testing import TestingSettings

__all__ = [
    "BaseAppSettings",
    "DevelopmentSettings",
    "ProductionSettings",
    "TestingSettings",
    "get_settings",
]
