"""
Application configuration using Pydantic Settings.

Centralizes runtime configuration with environment variable support.
Reminder defaults (water window, slot count) live in config/defaults.yaml,
see typed_config.load_reminder_defaults().
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Database (settings store)
    database_url: str = "sqlite+aiosqlite:///./data/patty.db"

    # Logging (see utils.logging.setup_logging)
    log_level: str = "INFO"
    log_to_file: bool = True
    logs_dir: str = "logs"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "PATTY_"
        extra = "ignore"  # Ignore extra env vars


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
