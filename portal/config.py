"""
Configuration management for the Candidate Portal.
"""

import logging

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = ""

    # Document storage
    storage_dir: str = "storage"
    storage_public_url: str = "http://localhost:8000/files"
    storage_api_url: str = ""  # Remote object store; local disk when empty
    storage_api_key: str = ""
    storage_timeout: float = 30.0

    # Application wizard
    max_resume_bytes: int = 5 * 1024 * 1024  # 5 MB
    min_phone_length: int = 10
    wizard_session_ttl: int = 3600
    wizard_session_max: int = 500
    submit_rate_limit: str = "5/minute"

    # API
    cors_origins: str = "http://localhost:5173"

    # Observability
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Set up root logging once for the API and the CLI."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
