"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


def is_valid_prefix(prefix: str) -> bool:
    """Ticket prefixes are plain ASCII letters, so codes split cleanly into prefix and number."""
    return bool(prefix) and prefix.isascii() and prefix.isalpha()


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Box Office API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database - a local SQLite file by default, PostgreSQL via asyncpg in production
    DATABASE_URL: str = "sqlite+aiosqlite:///./cinema.db"
    DATABASE_URL_SYNC: str = "sqlite:///./cinema.db"
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # 30 minutes
    SQLITE_BUSY_TIMEOUT: float = 15.0  # seconds a writer waits for the file lock

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_CACHE_TTL: int = 300  # 5 minutes default TTL
    REDIS_ENABLED: bool = True

    # Queue tickets
    TICKET_PREFIX: str = "A"
    TICKET_ISSUE_MAX_ATTEMPTS: int = 5

    # Catalog
    SEED_DEMO_CATALOG: bool = True

    @field_validator("TICKET_PREFIX")
    @classmethod
    def check_ticket_prefix(cls, value: str) -> str:
        if not is_valid_prefix(value):
            raise ValueError("TICKET_PREFIX must be one or more ASCII letters")
        return value

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
