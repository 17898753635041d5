"""Application configuration using pydantic-settings."""
import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Frozen so that a single instance can be handed to middlewares at construction
    time and shared for the lifetime of the process.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")
    db_create_tables: bool = Field(default=True, validation_alias="DB_CREATE_TABLES")

    # Static shared secret expected in the Authorization header for /api routes
    api_token: str = Field(min_length=1, validation_alias="API_TOKEN")

    # "production" hides error details in 500 responses and shortens request logs
    environment: Literal["production", "development", "test"] = Field(
        default="development",
        validation_alias="ENVIRONMENT",
    )

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(default="*", validation_alias="CORS_ORIGINS")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @property
    def is_production(self) -> bool:
        """Whether the service runs in production mode."""
        return self.environment == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
