"""Centralized logging configuration.

Each category of loggers gets its level from one Settings field, so the
mutation trace of the sync core can be turned up to DEBUG while outbound HTTP
chatter stays at WARNING.

Usage:
    from care_sync.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from care_sync.config import Settings, get_settings

# Settings field -> loggers it controls
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_http": ("httpx", "httpcore", "care_sync.infrastructure.http"),
    "log_level_sync": ("care_sync.application.services",),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
}

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply root and per-category log levels; returns the level set per logger name."""
    settings = settings or get_settings()
    applied: dict[str, int] = {"root": _parse_level(settings.log_level)}

    root = logging.getLogger()
    root.setLevel(applied["root"])
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, http=%s, sync=%s, uvicorn=%s",
        settings.log_level,
        settings.log_level_http,
        settings.log_level_sync,
        settings.log_level_uvicorn,
    )
    return applied


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names mean INFO."""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
