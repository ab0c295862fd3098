from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Folio API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./folio.db"
    cors_origins: list[str] = ["http://localhost:3020"]

    # Backend registry: keys are "<backend_namespace>:<kind>-reader|printer"
    backend_namespace: str = "folio:apps"

    # Images
    image_root: str = "media/images"
    media_url: str = "/media/"
    thumb_width: int = 200
    jpeg_quality: int = 85

    # Listing & creation
    page_count: int = 30
    title_path_attempts: int = 5

    # Token expected in the X-Admin-Token header; empty disables admin access
    admin_token: str = ""

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine, SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_images: str = "INFO"           # ImageAssetService pipeline

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
