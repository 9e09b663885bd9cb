"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "catalog-search"
    debug: bool = False
    environment: str = "development"

    # Database (SQLite for local dev, PostgreSQL for prod)
    database_url: str = "sqlite+aiosqlite:///./catalog.db"

    # Frontend
    frontend_url: str = "http://localhost:4290"

    # API
    api_prefix: str = "/api"

    # Admin auth
    session_ttl_hours: int = 24
    password_hash_iterations: int = 260_000

    # Search
    search_cache_size: int = 256  # 0 disables the result cache


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
