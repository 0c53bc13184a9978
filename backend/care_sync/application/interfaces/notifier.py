"""Abstract interface (port) for user-facing notifications."""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Toast-style notifications raised by the synchronization core."""

    @abstractmethod
    def success(self, title: str, message: str) -> None:
        ...

    @abstractmethod
    def error(self, title: str, message: str, *, retryable: bool = True) -> None:
        ...
