import logging
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Care Records Sync"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Care records REST backend
    api_base_url: str = "http://localhost:5000/api"
    api_timeout_seconds: float = 15.0
    api_token: str = ""

    # Optimistic sync
    facility_timezone: str = "Asia/Tokyo"
    synthesize_future_dates: bool = False

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_sync: str = "INFO"             # mutation executor / record store
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Fall back to UTC when the configured facility timezone is unknown."""
        try:
            ZoneInfo(self.facility_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            _config_logger.warning(
                "Unknown facility timezone %r, using UTC: %s", self.facility_timezone, exc
            )
            object.__setattr__(self, "facility_timezone", "UTC")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
