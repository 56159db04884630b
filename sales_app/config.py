"""
Configuration for the sales dashboard API.
Values come from environment variables or a local .env file.
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    # Database
    database_url: str = "sqlite:///./transactions.db"
    db_echo: bool = False

    # Seed source
    seed_url: str = DEFAULT_SEED_URL
    seed_timeout: float = 30.0

    # Server
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (used by tests)."""
    global _settings
    _settings = Settings()
    return _settings
