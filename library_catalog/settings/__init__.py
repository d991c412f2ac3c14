"""Settings module with nested configuration groups."""

import os
from enum import Enum
from typing import Any, Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from library_catalog.settings.models import DatabaseSettings, LoggingSettings


class Environment(str, Enum):
    """Application environment types."""

    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):  # type: ignore[misc]
    """
    Main settings class.

    Flat env vars like DB_USER are grouped into nested models through the
    read-only properties below.
    """

    model_config = SettingsConfigDict(case_sensitive=True)

    # Environment configuration
    ENV: Environment = Environment.DEV

    # Database settings (flat - grouped into nested model)
    DB_URL: str | None = None
    DB_USER: str | None = None
    DB_PASSWORD: SecretStr | None = None
    DB_HOST: str = "library-catalog-db"
    DB_PORT: int = 5432
    DB_NAME: str = "library-catalog-db"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    DB_INIT_RETRY_INTERVAL: int = 2
    DB_INIT_MAX_RETRIES: int = 5

    # Logging settings (flat - grouped into nested model)
    LOG_FILE_PATH: str = "logs/logging_errors.log"
    LOG_LEVEL: str = "INFO"
    LOG_CONSOLE_FORMAT: Literal["human", "json"] = "human"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize settings with environment-specific defaults."""
        super().__init__(**kwargs)
        self._apply_environment_defaults()

    def _apply_environment_defaults(self) -> None:
        """Apply environment-specific configuration defaults."""
        if self.ENV == Environment.PRODUCTION:
            if os.getenv("LOG_CONSOLE_FORMAT") is None:
                self.LOG_CONSOLE_FORMAT = "json"
            if os.getenv("LOG_LEVEL") is None:
                self.LOG_LEVEL = "WARNING"

        elif self.ENV == Environment.STAGING:
            if os.getenv("LOG_CONSOLE_FORMAT") is None:
                self.LOG_CONSOLE_FORMAT = "json"
            if os.getenv("LOG_LEVEL") is None:
                self.LOG_LEVEL = "INFO"

        else:  # Environment.DEV
            if os.getenv("LOG_CONSOLE_FORMAT") is None:
                self.LOG_CONSOLE_FORMAT = "human"
            if os.getenv("LOG_LEVEL") is None:
                self.LOG_LEVEL = "DEBUG"

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings as nested model."""
        return DatabaseSettings(
            URL=self.DB_URL,
            USER=self.DB_USER,
            PASSWORD=self.DB_PASSWORD,
            HOST=self.DB_HOST,
            PORT=self.DB_PORT,
            NAME=self.DB_NAME,
            POOL_SIZE=self.DB_POOL_SIZE,
            MAX_OVERFLOW=self.DB_MAX_OVERFLOW,
            POOL_RECYCLE=self.DB_POOL_RECYCLE,
            POOL_PRE_PING=self.DB_POOL_PRE_PING,
            INIT_RETRY_INTERVAL=self.DB_INIT_RETRY_INTERVAL,
            INIT_MAX_RETRIES=self.DB_INIT_MAX_RETRIES,
        )

    @property
    def logging(self) -> LoggingSettings:
        """Get logging settings as nested model."""
        return LoggingSettings(
            FILE_PATH=self.LOG_FILE_PATH,
            LEVEL=self.LOG_LEVEL,
            CONSOLE_FORMAT=self.LOG_CONSOLE_FORMAT,
        )

    @property
    def DATABASE_URL(self) -> str:
        """Construct the database URL."""
        return self.database.url

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENV == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENV == Environment.DEV


app_settings = Settings()

__all__ = [
    "Settings",
    "app_settings",
    "Environment",
    "DatabaseSettings",
    "LoggingSettings",
]
