"""Application configuration settings."""

from pathlib import Path
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SHORTLINKS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "short_links.db"

    # Application
    app_title: str = "Short Links Service"
    app_version: str = "0.1.0"
    app_description: str = "Expiring short links with lazy expiry on visit"
    log_level: str = "INFO"

    # Public base URL used to build share links; request base URL when unset
    base_url: Optional[str] = None

    # Slugs
    slug_length: int = 7
    slug_max_attempts: int = 5

    # Resolution
    resolve_path: str = "/resolve"
    redirect_status_code: int = 307
    not_found_cache_control: str = "s-maxage=10000000, stale-while-revalidate"

    @property
    def db_path(self) -> Path:
        """Get database path as Path object."""
        return Path(self.database_url)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
