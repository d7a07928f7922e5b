"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "FitPro API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Storage: "sql" persists through SQLAlchemy, "memory" lives for the process only
    storage_backend: Literal["sql", "memory"] = "sql"
    database_url: str = "sqlite+aiosqlite:///./fitpro.db"
    database_create_tables: bool = True

    # Key names inside the key-value store
    accounts_key: str = "fitpro_users"
    session_key: str = "fitpro_user"
    profiles_key: str = "fitpro_database_v2"

    demo_account_enabled: bool = True

    # Simulated latency in seconds (0 disables the delay)
    auth_latency: float = 0.0
    profile_read_latency: float = 0.0
    profile_write_latency: float = 0.0

    # CORS: comma-separated list of allowed origins outside development
    cors_origins: str = ""

    @property
    def async_database_url(self) -> str:
        """Async URL for the app engine (asyncpg for Postgres, aiosqlite for SQLite)."""
        url = self.database_url
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

    @property
    def sync_database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        return (
            self.async_database_url.replace("+asyncpg", "", 1).replace("+aiosqlite", "", 1)
        )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
