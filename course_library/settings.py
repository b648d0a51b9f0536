import os
from enum import Enum
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types."""

    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):  # type: ignore[misc]
    """
    Main settings class.

    Values are read from case-sensitive environment variables. Unset logging
    values get environment-specific defaults after initialization.
    """

    model_config = SettingsConfigDict(case_sensitive=True)

    # Environment configuration
    ENV: Environment = Environment.DEV

    # Database settings
    DATABASE_URL: str = "sqlite+aiosqlite:///library.db"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    DB_INIT_RETRY_INTERVAL: int = 2
    DB_INIT_MAX_RETRIES: int = 5
    RESET_DATABASE_ON_STARTUP: bool = False

    # Logging settings
    LOG_FILE_PATH: str = "logs/logging_errors.log"
    LOG_LEVEL: str = "INFO"
    LOKI_ENABLED: bool = False
    LOKI_URL: str = "http://loki:3100"
    LOKI_VERSION: str = "1"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10

    def __init__(self, **kwargs: Any) -> None:
        """Initialize settings with environment-specific defaults."""
        super().__init__(**kwargs)
        self._apply_environment_defaults()

    def _apply_environment_defaults(self) -> None:
        """Apply environment-specific configuration defaults."""
        if os.getenv("LOG_LEVEL") is not None:
            return

        if self.ENV == Environment.PRODUCTION:
            self.LOG_LEVEL = "WARNING"
        elif self.ENV == Environment.STAGING:
            self.LOG_LEVEL = "INFO"
        else:  # Environment.DEV
            self.LOG_LEVEL = "DEBUG"

    @property
    def is_development(self) -> bool:
        """Whether full diagnostic detail may be returned to clients."""
        return self.ENV == Environment.DEV


app_settings = Settings()
