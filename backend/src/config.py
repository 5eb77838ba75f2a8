"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Catalog settings loaded from environment variables.

    All settings have sensible defaults for local development.

    Environment Variables:
        DATABASE_URL: SQLAlchemy connection string for the record store
        DATABASE_ECHO: Log every SQL statement (default False)
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
        ENVIRONMENT: Deployment environment name
        DEFAULT_LOAN_DAYS: Loan period used when a loan request gives none
    """

    # Database
    DATABASE_URL: str = "sqlite:///./catalog.db"
    DATABASE_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # Application
    ENVIRONMENT: str = "development"

    # Lending
    DEFAULT_LOAN_DAYS: int = Field(default=14, ge=1, le=365)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
