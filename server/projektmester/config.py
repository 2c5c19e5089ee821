"""Application configuration using Pydantic settings."""

from pathlib import Path
from pydantic_settings import BaseSettings
from functools import lru_cache

# Canonical paths are computed relative to the server directory so they
# work regardless of cwd
_SERVER_DIR = Path(__file__).resolve().parent.parent
_DEFAULT_DB_PATH = _SERVER_DIR / "projektmester.db"
_DEFAULT_DATABASE_URL = f"sqlite:///{_DEFAULT_DB_PATH}"
_DEFAULT_STORAGE_PATH = _SERVER_DIR / "uploads"


class Settings(BaseSettings):
    """Application settings."""

    # Database - defaults to server/projektmester.db as absolute path
    database_url: str = _DEFAULT_DATABASE_URL

    # Security
    secret_key: str = "dev-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 24 hours

    # Environment
    app_env: str = "development"
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Uploaded files
    storage_path: Path = _DEFAULT_STORAGE_PATH
    max_upload_bytes: int = 50 * 1024 * 1024  # 50 MiB

    # First admin, created on startup when no users exist
    bootstrap_admin_email: str = "admin@projektmester.hu"
    bootstrap_admin_password: str = "admin"
    bootstrap_admin_name: str = "Rendszergazda"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
