"""Nested settings models (BaseModel, not BaseSettings)."""

from typing import Literal

from pydantic import BaseModel, SecretStr


class DatabaseSettings(BaseModel):  # type: ignore[misc]
    """Database configuration."""

    URL: str | None = None
    USER: str | None = None
    PASSWORD: SecretStr | None = None
    HOST: str = "library-catalog-db"
    PORT: int = 5432
    NAME: str = "library-catalog-db"
    POOL_SIZE: int = 20
    MAX_OVERFLOW: int = 10
    POOL_RECYCLE: int = 3600
    POOL_PRE_PING: bool = True
    INIT_RETRY_INTERVAL: int = 2
    INIT_MAX_RETRIES: int = 5

    @property
    def url(self) -> str:
        """
        Construct database URL.

        An explicit URL wins. Otherwise PostgreSQL is used when credentials
        are configured, and a local SQLite file when they are not.
        """
        if self.URL:
            return self.URL

        if self.USER is None or self.PASSWORD is None:
            return "sqlite+aiosqlite:///./library_catalog.db"

        password = self.PASSWORD.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.USER}:{password}"
            f"@{self.HOST}:{self.PORT}/{self.NAME}"
        )

    @property
    def is_sqlite(self) -> bool:
        """Check whether the configured URL points at SQLite."""
        return self.url.startswith("sqlite")


class LoggingSettings(BaseModel):  # type: ignore[misc]
    """Logging configuration."""

    FILE_PATH: str = "logs/logging_errors.log"
    LEVEL: str = "INFO"
    CONSOLE_FORMAT: Literal["human", "json"] = "human"
