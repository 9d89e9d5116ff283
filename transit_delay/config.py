"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# Predictions at or below this many minutes count as "On Time"
ON_TIME_THRESHOLD_MINUTES = 2


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Transit Delay Predictor"
    app_env: str = "development"  # development, staging, production
    debug: bool = False
    log_level: str = "INFO"

    # Server
    server_port: int = 2022
    cors_origins: list[str] = [
        "http://localhost:3000",  # Local web dev
        "http://localhost:5173",  # Vite dev server
    ]

    # Database
    database_url: str = "postgresql://localhost:5432/transit_delay"

    # Statistics
    on_time_threshold_minutes: int = ON_TIME_THRESHOLD_MINUTES
    dashboard_recent_limit: int = 5
    recent_queries_default_limit: int = 10
    all_queries_limit: int = 100

    @property
    def async_database_url(self) -> str:
        """Database URL rewritten for an async driver."""
        url = self.database_url
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("sqlite:///"):
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return url

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
