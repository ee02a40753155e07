"""
Production environment specific settings.
"""

from .base import BaseAppSettings


class ProductionSettings(BaseAppSettings):
    """
    Settings class for production environment.

    Debug mode is always off; DATABASE_URL is expected from the environment.
    """

    DEBUG: bool = False
    LOG_JSON_FORMAT: bool = True
