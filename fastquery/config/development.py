"""
Development environment specific settings.
"""

from .base import BaseAppSettings


class DevelopmentSettings(BaseAppSettings):
    """
    Settings class for development environment.

    Enables debug mode and uses a local SQLite database by default.
    """

    DEBUG: bool = True
    DATABASE_URL: str = "sqlite:///./dev.db"
    LOG_LEVEL: str = "DEBUG"
