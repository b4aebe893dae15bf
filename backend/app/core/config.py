"""
Application Configuration

All settings loaded from environment variables (or a local .env file).
"""

from functools import lru_cache
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "Stock Provider Gateway"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3001

    # CORS
    cors_origins: list[str] = ["*"]

    # Marketstack (free tier is plain HTTP only)
    marketstack_api_key: Optional[str] = None
    marketstack_base_url: str = "http://api.marketstack.com/v1"
    marketstack_timeout_seconds: float = 10.0

    # Polygon.io
    polygon_api_key: Optional[str] = None
    polygon_base_url: str = "https://api.polygon.io"
    polygon_timeout_seconds: float = 15.0

    @field_validator("marketstack_api_key", "polygon_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @property
    def marketstack_configured(self) -> bool:
        return self.marketstack_api_key is not None

    @property
    def polygon_configured(self) -> bool:
        return self.polygon_api_key is not None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
