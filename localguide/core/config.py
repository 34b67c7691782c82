"""Application configuration."""

from functools import lru_cache
import os
from pathlib import Path

from pydantic import BaseModel


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Application settings (environment values override the defaults)."""

    project_name: str = os.getenv("PROJECT_NAME", "Local Guide API")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    data_dir: str = os.getenv("DATA_DIR", "data")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./reviews.db")
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

    admin_password: str = os.getenv("ADMIN_PASSWORD", "admin2024")

    twitter_bearer_token: str | None = os.getenv("TWITTER_BEARER_TOKEN")
    social_refresh_enabled: bool = _env_flag("SOCIAL_REFRESH_ENABLED", "true")
    social_refresh_interval_seconds: float = float(os.getenv("SOCIAL_REFRESH_INTERVAL_SECONDS", "1800"))
    social_fetch_timeout_seconds: float = float(os.getenv("SOCIAL_FETCH_TIMEOUT_SECONDS", "10"))

    @property
    def places_path(self) -> Path:
        return Path(self.data_dir) / "places.json"

    @property
    def config_path(self) -> Path:
        return Path(self.data_dir) / "config.json"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
