from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.version import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    PORT: int = 8000
    APP_ENV: Literal["development", "production"] = "production"
    APP_NAME: str = "Momentmix"

    # Bucket boundaries are evaluated in this zone when no time override is given
    TIMEZONE: str = "America/Chicago"
    BLOCK_SIZE: int = 5
    CATALOG_PATH: str | None = None

    # Artwork enrichment
    ENRICHMENT_ENABLED: bool = True
    ENRICHMENT_TIMEOUT_SECONDS: float = 3.0
    ENRICHMENT_CACHE_TTL_SECONDS: int = 86400  # 24 hours
    ENRICHMENT_CACHE_MAXSIZE: int = 10000
    ENRICHMENT_CACHE_BACKEND: Literal["memory", "redis"] = "memory"
    OEMBED_BASE_URL: str = "https://open.spotify.com"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_ENRICHMENT_KEY: str = "momentmix:enrich:"


settings = Settings()

APP_VERSION = __version__
