"""Abstract gateway interface (port) for care record persistence."""

from abc import ABC, abstractmethod
from typing import Any

from care_sync.domain.entities import RecordScope


class RecordGateway(ABC):
    """Port for one resource type of the backend — implemented in the infrastructure layer.

    Payloads are plain dicts keyed by Python field names; wire formatting
    (aliases, date encoding) is the adapter's concern. Implementations raise
    the errors of ``care_sync.domain.exceptions`` and nothing else.
    """

    @abstractmethod
    async def list(self, scope: RecordScope) -> list[dict[str, Any]]:
        """Retrieve every record of the scope."""
        ...

    @abstractmethod
    async def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Persist a new record and return the server's canonical copy, including ``id``."""
        ...

    @abstractmethod
    async def update(self, record_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """Update the named fields of a record and return the updated record."""
        ...

    @abstractmethod
    async def delete(self, record_id: str) -> None:
        """Delete a record."""
        ...
