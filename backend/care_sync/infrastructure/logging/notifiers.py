"""Notifier adapters — where toast-style messages of the sync core end up."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from care_sync.application.interfaces import Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Writes notifications to the application log."""

    def success(self, title: str, message: str) -> None:
        logger.info("%s: %s", title, message)

    def error(self, title: str, message: str, *, retryable: bool = True) -> None:
        logger.warning("%s: %s (retryable=%s)", title, message, retryable)


@dataclass
class Notification:
    level: str
    title: str
    message: str
    retryable: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RecordingNotifier(LoggingNotifier):
    """Keeps notifications in memory until the UI drains them as toasts."""

    def __init__(self, max_items: int = 50):
        self._items: list[Notification] = []
        self._max_items = max_items

    def success(self, title: str, message: str) -> None:
        super().success(title, message)
        self._push(Notification("success", title, message))

    def error(self, title: str, message: str, *, retryable: bool = True) -> None:
        super().error(title, message, retryable=retryable)
        self._push(Notification("error", title, message, retryable))

    def drain(self) -> list[Notification]:
        items, self._items = self._items, []
        return items

    def _push(self, item: Notification) -> None:
        self._items.append(item)
        del self._items[: -self._max_items]
