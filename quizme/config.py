"""Application configuration module."""

from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from the environment and ``.env``."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API settings
    PROJECT_NAME: str = "QuizMe"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]

    # Storage settings
    STORE_BACKEND: str = "sql"
    DATABASE_URL: str = "sqlite+aiosqlite:///./quizme.db"
    SQL_ECHO: bool = False
    DB_POOL_SIZE: int = 5

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    LOG_FILE: Optional[str] = None

    # Explanation service settings
    OPENAI_API_KEY: Optional[str] = None
    AI_API_BASE: str = "https://api.openai.com/v1"
    AI_MODEL: str = "gpt-3.5-turbo"
    AI_TIMEOUT: float = 30.0
    AI_MAX_RETRIES: int = 2
    AI_TEMPERATURE: float = 0.7
    AI_MAX_TOKENS: int = 500

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("STORE_BACKEND")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Validate storage backend"""
        if v.lower() not in ("sql", "memory"):
            raise ValueError(f"Invalid store backend: {v}. Must be 'sql' or 'memory'")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
