"""
Client configuration.

Loaded from BLITZTIME_* environment variables (or a .env file in the working directory).
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Blitztime client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BLITZTIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Base URL of the API, shared by the HTTP endpoints and the timer socket
    api_url: str = "http://localhost:8000"
    request_timeout: float = 10.0  # seconds
    socketio_path: str = "socket.io"
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
