# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to wiki endpoints, storage paths, fetch limits and logging config

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="NIKKEDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Wiki Configuration
    wiki_base_url: str = Field(
        default="https://nikke-goddess-of-victory-international.fandom.com",
        description="Base URL of the character wiki",
    )
    home_path: str = Field(default="/wiki/Home", description="Path of the page carrying the character listing")
    user_agent: str = Field(
        default="nikkedex/1.0 (+https://github.com/nikkedex/nikkedex)", description="User-Agent for wiki requests"
    )

    # Fetch Configuration
    request_timeout: float = Field(default=30.0, description="Per-request timeout in seconds")
    max_concurrency: int = Field(default=4, ge=1, description="Maximum character pages processed at once")
    fetch_retry_attempts: int = Field(default=3, ge=1, description="Attempts per request before giving up")
    fetch_rate_limit: float = Field(default=4.0, description="Maximum wiki requests per second (0 disables)")

    # Storage Configuration
    database_path: Path = Field(default=Path("data/nikke-db.json"), description="JSON array of extracted records")
    image_dir: Path = Field(default=Path("static/images/characters"), description="Root of big/ and small/ images")
    thumbnail_size: int = Field(default=80, ge=1, description="Bounding box (pixels) of generated thumbnails")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    @property
    def home_url(self) -> str:
        return self.wiki_base_url + self.home_path


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
