"""Application configuration loaded from environment variables."""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="HEALTH_HUB_", env_file=".env", extra="ignore")

    # Remote Health Hub backend
    api_url: str = "http://localhost:5000/api"
    request_timeout: Optional[float] = 120.0  # seconds

    # Dashboard
    bmi_history_limit: int = 10

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8082
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
