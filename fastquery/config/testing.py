"""
Testing environment specific settings.
"""

from .base import BaseAppSettings


class TestingSettings(BaseAppSettings):
    """
    Settings class for testing environment.

    Uses an in-memory SQLite database and enables debug mode.
    """

    DEBUG: bool = True
    DATABASE_URL: str = "sqlite:///:memory:"
