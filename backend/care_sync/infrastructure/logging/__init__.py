"""Logging infrastructure package."""

from .log_config import setup_logging
from .notifiers import LoggingNotifier, Notification, RecordingNotifier
from .sync_logger import SyncLogger, SyncStage

__all__ = [
    "setup_logging",
    "LoggingNotifier",
    "Notification",
    "RecordingNotifier",
    "SyncLogger",
    "SyncStage",
]
