"""
Application configuration using environment variables.
"""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Pixlink API"
    debug: bool = False
    environment: str = "development"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./pixlink.db")

    # Share links are built as {public_base_url}/i/{short_url}
    public_base_url: str = "http://localhost:8000"

    # Short URL generation
    short_url_length: int = 8
    short_url_max_attempts: int = 10

    # CORS
    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Rate limiting
    create_user_rate_limit: str = "10/minute"
    upload_rate_limit: str = "30/minute"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "PIXLINK_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
