"""Query-cache loader — fills the record store from the backend."""

import logging
from collections.abc import Hashable

from pydantic import ValidationError

from care_sync.application.interfaces import RecordGateway
from care_sync.application.resources import ResourceConfig
from care_sync.domain.entities import RecordScope
from care_sync.infrastructure.logging.sync_logger import SyncLogger, SyncStage

from .record_store import RecordCollection, RecordStore

logger = logging.getLogger(__name__)


class RecordQueryService:
    """Fetches the collection of a scope and caches it in the RecordStore.

    A refetch never drops unsaved placeholder rows: they are carried over
    on top of the fresh server collection until their create resolves.
    """

    def __init__(self, store: RecordStore, gateway: RecordGateway, resource: ResourceConfig):
        self._store = store
        self._gateway = gateway
        self._resource = resource
        self._log = SyncLogger(f"{__name__}.{resource.name}")

    async def fetch(self, scope: RecordScope) -> RecordCollection:
        with self._log.timed_step(SyncStage.FETCH, f"Loading {self._resource.label}"):
            payloads = await self._gateway.list(scope)

        records = []
        for payload in payloads:
            try:
                record = self._resource.from_server(payload)
            except ValidationError as exc:
                logger.warning("Skipping malformed %s row: %s", self._resource.name, exc)
                continue
            # The backend filters by range already; guard against loose filtering
            if self._resource.date_bound and not scope.covers(record.record_date):
                continue
            records.append(record)

        server_ids = {r.id for r in records}
        unsaved = [r for r in self._store.get(scope) if r.pending and r.id not in server_ids]
        logger.debug(
            "Fetched %d %s records, keeping %d unsaved rows",
            len(records),
            self._resource.name,
            len(unsaved),
        )
        return self._store.set(scope, records + unsaved)

    async def ensure(self, scope: RecordScope) -> RecordCollection:
        """Return the cached collection, fetching it on first use."""
        if self._store.has(scope):
            return self._store.get(scope)
        return await self.fetch(scope)

    def invalidate(self, scope: Hashable) -> None:
        self._store.invalidate(scope)
