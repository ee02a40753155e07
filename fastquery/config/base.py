"""
Base configuration module for FastQuery.

This module provides the base settings class that environment specific
settings classes inherit from. It handles application identity, database
access and the fallback sort field used by the search subsystem.
"""

from typing import Optional

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings


class BaseAppSettings(BaseSettings):
    """
    Base settings class for application configuration.

    Attributes:
        APP_NAME: The name of the application
        DEBUG: Flag to enable/disable debug mode
        VERSION: Application version string
        DATABASE_URL: Database connection URL (synchronous SQLAlchemy driver)
        DB_ECHO: Enable SQL query logging (echo)
        DEFAULT_SORT_FIELD: Sort field used when an entity allows no sort fields
        LOG_LEVEL: Logging level name
        LOG_JSON_FORMAT: Emit logs as JSON lines
    """

    APP_NAME: str = Field(default="FastQuery")
    DEBUG: bool = Field(default=False)
    VERSION: str = Field(default="0.1.0")

    # Database configuration
    DATABASE_URL: str = Field(
        default="sqlite:///:memory:", description="Database connection URL"
    )
    DB_ECHO: bool = Field(default=False, description="Enable SQL query logging (echo)")

    # Search configuration
    DEFAULT_SORT_FIELD: str = Field(
        default="created_at",
        description="Sort field used when an entity declares no sortable fields",
    )

    # Logging configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level name")
    LOG_JSON_FORMAT: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, value):
        """Accept log level names in any case."""
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("DATABASE_URL", mode="before")
    def validate_database_url(cls, value: Optional[str]):
        """
        Ensure DATABASE_URL uses a synchronous driver.

        The search subsystem runs on plain SQLAlchemy sessions, so async
        drivers such as asyncpg or aiosqlite cannot be used here.
        """
        if value and ("+asyncpg" in value or "+aiosqlite" in value):
            raise ValueError(
                "DATABASE_URL must use a synchronous driver (for example "
                "'postgresql+psycopg://' or 'sqlite://'). "
                f"You provided: {value}"
            )
        return value

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")
