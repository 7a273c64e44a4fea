"""
Configuration settings for Household Hub.

Loads environment variables from .env file and provides typed configuration.
One code base serves both deployments; APP_DOMAIN picks the resource set.
"""

from typing import List, Literal
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Household Hub API"
    APP_VERSION: str = "1.0.0"
    APP_DOMAIN: Literal["kitchen", "vehicle"] = Field(
        default="kitchen",
        description="Which resource set to serve: 'kitchen' or 'vehicle'",
    )

    # API Configuration
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Database Configuration
    DATABASE_URL: str = Field(
        default="sqlite:///./data/household_hub.db",
        description="SQLAlchemy database URL (sqlite or postgresql)",
    )
    DATABASE_ECHO: bool = Field(
        default=False, description="Echo SQL queries (for debugging)"
    )
    DB_POOL_SIZE: int = Field(default=20, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(default=0, description="Extra connections over pool size")
    DB_POOL_TIMEOUT: int = Field(
        default=10, description="Seconds to wait for a pooled connection"
    )
    DB_POOL_RECYCLE: int = Field(
        default=30, description="Seconds before an idle connection is recycled"
    )

    # Shopping list
    CLEANUP_INTERVAL_HOURS: int = Field(
        default=24, description="Minimum hours between purchased-item purges"
    )

    # Vehicle service
    UPCOMING_SERVICES_DAYS: int = Field(
        default=30, description="Default look-ahead for upcoming services"
    )
    SERVICE_LOG_LIMIT: int = Field(
        default=100, description="Maximum rows returned by the global service log"
    )

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable slowapi limits")
    WRITE_RATE_LIMIT: str = Field(
        default="120/minute", description="Limit applied to zone and list writes"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    ENABLE_FILE_LOGGING: bool = Field(
        default=False, description="Enable logging to file"
    )
    LOG_FILE: str = Field(
        default="./logs/household_hub.log", description="Log file path"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
