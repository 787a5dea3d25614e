import os
from enum import Enum
from typing import Any, Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from worldcup_api.constants import MAX_PAGE_SIZE


class Environment(str, Enum):
    """Application environment types."""

    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):  # type: ignore[misc]
    """
    Application settings loaded from environment variables.

    Database credentials have no defaults and must be provided via the
    environment. Fixed limits that must never be tuned per deployment
    live in worldcup_api/constants.py instead.
    """

    model_config = SettingsConfigDict(case_sensitive=True)

    # Environment configuration
    ENV: Environment = Environment.DEV

    # Database settings (credentials MUST be provided via environment)
    DB_DRIVER: str = "postgresql+asyncpg"
    DB_USER: str
    DB_PASSWORD: SecretStr
    DB_HOST: str = "worldcup-db"
    DB_PORT: int = 5432
    DB_NAME: str = "worldcup"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    # Database initialization settings
    DB_INIT_RETRY_INTERVAL: int = 2
    DB_INIT_MAX_RETRIES: int = 5

    # Pagination defaults
    DEFAULT_PAGE_SIZE: int = 5

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = "logs/logging_errors.log"
    LOG_CONSOLE_FORMAT: Literal["human", "json"] = "human"

    # Metrics settings
    METRICS_ENABLED: bool = True

    @property
    def DATABASE_URL(self) -> str:
        """Construct the database URL from individual components."""
        password = self.DB_PASSWORD.get_secret_value()
        return (
            f"{self.DB_DRIVER}://{self.DB_USER}:{password}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @field_validator("DEFAULT_PAGE_SIZE")
    @classmethod
    def validate_default_page_size(cls, v: int) -> int:
        """Keep the default page size inside the accepted page size range."""
        if not 1 <= v <= MAX_PAGE_SIZE:
            raise ValueError(
                f"DEFAULT_PAGE_SIZE must be between 1 and {MAX_PAGE_SIZE}"
            )
        return v

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


app_settings = Settings()
