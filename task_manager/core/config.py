# =====================================================
# FILE: task_manager/core/config.py
# Application Settings (environment / .env driven)
# =====================================================

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # Application
    APP_NAME: str = "Task Manager API"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Error responses: return raw exception text on 500s (debug only)
    EXPOSE_ERROR_DETAILS: bool = False

    # Database - DATABASE_URL wins when set, otherwise MySQL is built from parts
    DATABASE_URL: Optional[str] = None
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "task_manager"
    DB_ECHO: bool = False
    DB_POOL_PRE_PING: bool = True
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Authentication
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Pagination
    DEFAULT_PER_PAGE: int = 15
    MAX_PER_PAGE: int = 100
    MAX_PAGE: int = 1_000_000


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
