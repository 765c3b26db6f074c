import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Pawtal CMS API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./data/pawtal.db"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Background scheduler
    scheduler_enabled: bool = True
    scheduler_interval_seconds: int = 60

    # Trash retention window before permanent erasure
    trash_retention_days: int = 30

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_scheduler: str = "INFO"        # ContentScheduler ticks
    log_level_lifecycle: str = "INFO"        # content create/update/publish/trash

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Clamp settings that would make the scheduler spin or erase on sight."""
        if self.scheduler_interval_seconds < 1:
            _config_logger.warning(
                "scheduler_interval_seconds=%s is too small; using 1",
                self.scheduler_interval_seconds,
            )
            object.__setattr__(self, "scheduler_interval_seconds", 1)
        if self.trash_retention_days < 0:
            _config_logger.warning(
                "trash_retention_days=%s is negative; using 0",
                self.trash_retention_days,
            )
            object.__setattr__(self, "trash_retention_days", 0)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
