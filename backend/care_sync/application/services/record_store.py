"""Domain Record Store — copy-on-write collections keyed by query scope."""

import logging
from collections.abc import Callable, Hashable, Iterable

from care_sync.domain.entities import Record

logger = logging.getLogger(__name__)

RecordCollection = tuple[Record, ...]


class RecordStore:
    """Owns the RecordCollection of every loaded scope.

    Collections are tuples of immutable Records and are never edited in
    place: every mutator stores and returns a new tuple. A snapshot taken with
    ``get`` therefore stays valid forever, and restoring it is a plain
    reference swap. The store is created explicitly and injected wherever it
    is needed.
    """

    def __init__(self) -> None:
        self._collections: dict[Hashable, RecordCollection] = {}
        self._versions: dict[Hashable, int] = {}

    def has(self, scope: Hashable) -> bool:
        return scope in self._collections

    def get(self, scope: Hashable) -> RecordCollection:
        """Current collection of the scope; empty when the scope was never loaded."""
        return self._collections.get(scope, ())

    def version(self, scope: Hashable) -> int:
        """Number of writes the scope has seen — changes whenever the collection does."""
        return self._versions.get(scope, 0)

    def find(self, scope: Hashable, record_id: str) -> Record | None:
        for record in self.get(scope):
            if record.id == record_id:
                return record
        return None

    def set(self, scope: Hashable, records: Iterable[Record]) -> RecordCollection:
        return self._write(scope, tuple(records))

    def insert(self, scope: Hashable, record: Record) -> RecordCollection:
        """Add a record, replacing any record with the same id."""
        kept = tuple(r for r in self.get(scope) if r.id != record.id)
        return self._write(scope, kept + (record,))

    def patch(
        self,
        scope: Hashable,
        predicate: Callable[[Record], bool],
        patch_fn: Callable[[Record], Record],
    ) -> RecordCollection:
        """Replace every record matching ``predicate`` with ``patch_fn(record)``.

        When nothing matches, the current collection is returned unchanged
        (same object, same version).
        """
        current = self.get(scope)
        changed = False
        patched: list[Record] = []
        for record in current:
            if predicate(record):
                patched.append(patch_fn(record))
                changed = True
            else:
                patched.append(record)
        if not changed:
            return current
        return self._write(scope, tuple(patched))

    def remove(self, scope: Hashable, record_id: str) -> RecordCollection:
        current = self.get(scope)
        kept = tuple(r for r in current if r.id != record_id)
        if len(kept) == len(current):
            return current
        return self._write(scope, kept)

    def restore(self, scope: Hashable, snapshot: RecordCollection) -> RecordCollection:
        """Put a previously taken snapshot back as the live collection."""
        logger.debug("Restoring snapshot of %s (%d records)", scope, len(snapshot))
        return self._write(scope, snapshot)

    def invalidate(self, scope: Hashable) -> None:
        self._collections.pop(scope, None)
        self._versions[scope] = self.version(scope) + 1

    def scopes(self) -> list[Hashable]:
        return list(self._collections)

    def _write(self, scope: Hashable, collection: RecordCollection) -> RecordCollection:
        self._collections[scope] = collection
        self._versions[scope] = self.version(scope) + 1
        return collection
