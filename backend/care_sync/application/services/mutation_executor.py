"""Optimistic Mutation Executor — local patch, one request, reconcile or roll back.

Every edit of a grid cell goes through ``apply``:

    Validating → Pending → Reconciled | RolledBack
        └─ rejected (nothing mutated, no request)

Edits are not queued. Several mutations on the same record may be in flight
at once and resolve in any order; reconciliation always merges into the
*current* collection, and a response never overwrites a field that has a
newer local edit (per-field last-write-wins).
"""

import asyncio
import itertools
import logging
from collections import Counter
from collections.abc import Hashable, Mapping
from typing import Any

from care_sync.application.interfaces import Notifier, RecordGateway
from care_sync.application.resources import ResourceConfig
from care_sync.domain.entities import (
    MutationOutcome,
    MutationStatus,
    PendingMutation,
    Record,
)
from care_sync.domain.exceptions import (
    EntityNotFoundError,
    NetworkError,
    ReconciliationConflict,
    RecordValidationError,
    SessionExpiredError,
    SyncError,
)
from care_sync.infrastructure.logging.sync_logger import SyncLogger, SyncStage

from .placeholder_generator import PlaceholderGenerator
from .record_store import RecordStore

logger = logging.getLogger(__name__)


class OptimisticMutationExecutor:
    """Applies field edits of one resource type optimistically.

    Depends on the record store and the gateway port (DI); the notifier is
    optional and receives the toast-style messages.
    """

    def __init__(
        self,
        store: RecordStore,
        gateway: RecordGateway,
        resource: ResourceConfig,
        *,
        placeholders: PlaceholderGenerator | None = None,
        notifier: Notifier | None = None,
    ):
        self._store = store
        self._gateway = gateway
        self._resource = resource
        self._placeholders = placeholders or PlaceholderGenerator()
        self._notifier = notifier
        self._log = SyncLogger(f"{__name__}.{resource.name}")
        self._ids = itertools.count(1)
        # (record id, field) -> id of the newest mutation issued for it
        self._issued: dict[tuple[str, str], int] = {}
        # (record id, field) -> number of mutations on it still awaiting a response
        self._in_flight: Counter[tuple[str, str]] = Counter()
        # placeholder id -> create request in flight, resolving to the server record
        self._creates: dict[str, asyncio.Future[Record]] = {}

    # ── Public operations ────────────────────────────────────────────

    async def apply(
        self, scope: Hashable, record_key: Record | str, field: str, value: Any
    ) -> MutationOutcome:
        """Edit one field of a record (real or placeholder)."""
        return await self.apply_changes(scope, record_key, {field: value})

    async def apply_changes(
        self, scope: Hashable, record_key: Record | str, changes: Mapping[str, Any]
    ) -> MutationOutcome:
        """Edit several fields of one record with a single request."""
        try:
            record = self._resolve(scope, record_key)
            coerced = self._resource.validate_changes(record, changes)
        except (EntityNotFoundError, RecordValidationError) as exc:
            return self._reject(exc)

        mutation = self._begin(scope, record, coerced)
        return await self._dispatch(mutation)

    async def create(
        self,
        scope: Hashable,
        owner_key: str,
        dimension_key: tuple[Any, ...],
        fields: Mapping[str, Any] | None = None,
    ) -> MutationOutcome:
        """Add a new row explicitly (e.g. a round stamp) and persist it."""
        slot_values = dict(zip(self._resource.dimension_fields, dimension_key))
        if self._resource.owner_field != "id" and owner_key:
            slot_values[self._resource.owner_field] = owner_key
        try:
            coerced = self._resource.validate_changes(None, {**slot_values, **(fields or {})})
        except RecordValidationError as exc:
            return self._reject(exc)

        record_id = self._placeholders.generate_unique(owner_key, dimension_key)
        placeholder = self._resource.placeholder(record_id, owner_key, dimension_key)
        mutation = self._begin(scope, placeholder, coerced)
        return await self._dispatch(mutation)

    async def delete(self, scope: Hashable, record_key: Record | str) -> MutationOutcome:
        """Delete a record; placeholders are dropped locally without a request."""
        try:
            record = self._resolve(scope, record_key)
        except (EntityNotFoundError, RecordValidationError) as exc:
            return self._reject(exc)

        if record.pending:
            self._store.remove(scope, record.id)
            self._log.step(SyncStage.DELETE, "Dropped unsaved row", id=record.id)
            return MutationOutcome(MutationStatus.RECONCILED, record)

        snapshot = self._store.get(scope)
        applied = self._store.remove(scope, record.id)
        self._log.step(SyncStage.DELETE, "Deleting", id=record.id)
        try:
            await self._gateway.delete(record.id)
        except Exception as exc:
            error = self._as_sync_error(exc)
            if self._store.get(scope) is applied:
                self._store.restore(scope, snapshot)
            elif self._store.find(scope, record.id) is None:
                self._store.insert(scope, record)
            self._log.step_error(SyncStage.ROLLBACK, f"Delete of {record.id} failed", error)
            return self._failure(error, record, action="delete")

        self._log.step_complete(SyncStage.DELETE, "Deleted", id=record.id)
        return MutationOutcome(MutationStatus.RECONCILED, record)

    def is_in_flight(self, record_id: str) -> bool:
        return record_id in self._creates or any(
            count and key[0] == record_id for key, count in self._in_flight.items()
        )

    # ── Pending ──────────────────────────────────────────────────────

    def _resolve(self, scope: Hashable, record_key: Record | str) -> Record:
        """Find the live version of a record, or rebuild a lost placeholder from its id.

        A slot placeholder whose slot already holds a saved record resolves to
        that record, so a grid still showing the old placeholder id edits the
        saved row instead of creating a second one.
        """
        record_id = record_key.id if isinstance(record_key, Record) else record_key
        live = self._store.find(scope, record_id)
        if live is not None:
            return live
        if not self._placeholders.is_placeholder(record_id):
            raise EntityNotFoundError(self._resource.label, record_id)

        owner_key, parts, stamp = self._placeholders.parse(record_id)
        if isinstance(record_key, Record):
            placeholder = record_key
        else:
            placeholder = self._resource.placeholder_from_parts(record_id, owner_key, parts)
        if stamp is None:
            saved = self._saved_in_slot(scope, placeholder.slot)
            if saved is not None:
                self._log.detail("Placeholder slot already saved", id=record_id, saved=saved.id)
                return saved
        return placeholder

    def _saved_in_slot(self, scope: Hashable, slot: tuple[str, tuple[Any, ...]]) -> Record | None:
        for record in self._store.get(scope):
            if not record.pending and record.slot == slot:
                return record
        return None

    def _begin(self, scope: Hashable, record: Record, changes: dict[str, Any]) -> PendingMutation:
        snapshot = self._store.get(scope)
        if self._store.find(scope, record.id) is None:
            applied = self._store.insert(scope, self._resource.patch(record, changes))
        else:
            applied = self._store.patch(
                scope,
                lambda r: r.id == record.id,
                lambda r: self._resource.patch(r, changes),
            )

        mutation = PendingMutation(
            mutation_id=next(self._ids),
            scope=scope,
            target_id=record.id,
            changes=dict(changes),
            previous={name: record.get(name) for name in changes},
            snapshot=snapshot,
            applied=applied,
        )
        for name in changes:
            self._issued[(record.id, name)] = mutation.mutation_id
            self._in_flight[(record.id, name)] += 1

        self._log.step(
            SyncStage.OPTIMISTIC,
            "Patched locally",
            id=record.id,
            fields=",".join(changes),
            mutation=mutation.mutation_id,
        )
        return mutation

    async def _dispatch(self, mutation: PendingMutation) -> MutationOutcome:
        # The id the record carries now; changes when a create reconciles
        target = [mutation.target_id]
        try:
            if self._placeholders.is_placeholder(mutation.target_id):
                record = await self._persist_placeholder(mutation, target)
            else:
                record = await self._update(mutation, mutation.target_id)
        except ReconciliationConflict as exc:
            self._log.step(SyncStage.DISCARD, "Record vanished, response dropped", id=exc.record_id)
            return MutationOutcome(MutationStatus.DISCARDED, error=exc)
        except Exception as exc:
            error = self._as_sync_error(exc)
            record = self._rollback(mutation, target[0])
            return self._failure(error, record, action="save")
        finally:
            self._release(mutation, target[0])

        return MutationOutcome(MutationStatus.RECONCILED, record)

    async def _persist_placeholder(self, mutation: PendingMutation, target: list[str]) -> Record:
        placeholder_id = mutation.target_id
        in_flight = self._creates.get(placeholder_id)
        if in_flight is not None:
            # A create for this row is already on its way: wait for the
            # server id, then send this edit as a plain update.
            self._log.detail("Create already in flight, deferring edit", id=placeholder_id)
            created = await asyncio.shield(in_flight)
            target[0] = created.id
            return await self._update(mutation, created.id)

        future: asyncio.Future[Record] = asyncio.get_running_loop().create_future()
        self._creates[placeholder_id] = future
        try:
            current = self._store.find(mutation.scope, placeholder_id)
            if current is None:
                raise ReconciliationConflict(placeholder_id)
            payload = self._resource.create_payload(current)
            self._log.step(SyncStage.REQUEST, "Creating", id=placeholder_id)
            response = await self._gateway.create(payload)
            record = self._reconcile_create(mutation, response)
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as exc:
            future.set_exception(exc)
            # Mark retrieved; deferred edits re-raise it themselves
            future.exception()
            raise
        else:
            future.set_result(record)
            target[0] = record.id
            return record
        finally:
            self._creates.pop(placeholder_id, None)

    async def _update(self, mutation: PendingMutation, record_id: str) -> Record:
        self._log.step(SyncStage.REQUEST, "Updating", id=record_id, fields=",".join(mutation.changes))
        response = await self._gateway.update(record_id, dict(mutation.changes))
        return self._reconcile_update(mutation, record_id, response)

    # ── Reconciled ───────────────────────────────────────────────────

    def _keeps_local(self, record_id: str, name: str, mutation: PendingMutation) -> bool:
        """Whether the local value of ``name`` must survive this mutation's response.

        True when a newer edit of the field was issued, or when another edit
        of it is still awaiting its own response.
        """
        if self._issued.get((record_id, name), 0) > mutation.mutation_id:
            return True
        others = self._in_flight[(record_id, name)] - (1 if name in mutation.changes else 0)
        return others > 0

    def _merge(self, current: Record, server: Record, mutation: PendingMutation) -> dict[str, Any]:
        merged = dict(current.fields)
        for name, value in server.fields.items():
            if not self._keeps_local(current.id, name, mutation):
                merged[name] = value
        return merged

    def _reconcile_create(self, mutation: PendingMutation, response: Mapping[str, Any]) -> Record:
        placeholder_id = mutation.target_id
        server = self._resource.from_server(response, partial=True)
        current = self._store.find(mutation.scope, placeholder_id)
        if current is None:
            raise ReconciliationConflict(placeholder_id)

        # Fields the response does not carry keep their local value
        reconciled = self._resource.build(server.id, self._merge(current, server, mutation))
        self._store.patch(mutation.scope, lambda r: r.id == placeholder_id, lambda r: reconciled)
        self._rekey(placeholder_id, server.id)
        self._log.step_complete(
            SyncStage.RECONCILE, "Placeholder replaced", placeholder=placeholder_id, id=server.id
        )
        self._notify_success(f"{self._resource.label} saved")
        return reconciled

    def _reconcile_update(
        self, mutation: PendingMutation, record_id: str, response: Mapping[str, Any]
    ) -> Record:
        server = self._resource.from_server(response, partial=True)
        current = self._store.find(mutation.scope, record_id)
        if current is None or server.id != record_id:
            raise ReconciliationConflict(record_id)

        reconciled = self._resource.build(record_id, self._merge(current, server, mutation))
        self._store.patch(mutation.scope, lambda r: r.id == record_id, lambda r: reconciled)
        self._log.step_complete(SyncStage.RECONCILE, "Merged server response", id=record_id)
        return reconciled

    def _rekey(self, old_id: str, new_id: str) -> None:
        """Move the per-field bookkeeping of a placeholder to its server id."""
        for key in [k for k in self._issued if k[0] == old_id]:
            newest = self._issued.pop(key)
            new_key = (new_id, key[1])
            self._issued[new_key] = max(newest, self._issued.get(new_key, 0))
        for key in [k for k in self._in_flight if k[0] == old_id]:
            self._in_flight[(new_id, key[1])] += self._in_flight.pop(key)

    def _release(self, mutation: PendingMutation, record_id: str) -> None:
        for name in mutation.changes:
            for key in ((record_id, name), (mutation.target_id, name)):
                if self._in_flight.get(key, 0) > 0:
                    self._in_flight[key] -= 1
                    if not self._in_flight[key]:
                        # Nothing left to compare against; the field is settled
                        del self._in_flight[key]
                        self._issued.pop(key, None)
                    break

    # ── RolledBack ───────────────────────────────────────────────────

    def _rollback(self, mutation: PendingMutation, record_id: str) -> Record | None:
        """Undo a failed mutation.

        If nothing touched the scope since this mutation's patch, the
        pre-mutation snapshot is put back as-is. Otherwise only this
        mutation's fields are reverted, skipping fields a newer edit owns.
        """
        scope = mutation.scope
        if self._store.get(scope) is mutation.applied:
            self._store.restore(scope, mutation.snapshot)
            self._log.step(SyncStage.ROLLBACK, "Snapshot restored", id=record_id)
            return self._store.find(scope, record_id)

        reverts = {
            name: previous
            for name, previous in mutation.previous.items()
            if self._issued.get((record_id, name), 0) <= mutation.mutation_id
        }
        if reverts:
            self._store.patch(
                scope,
                lambda r: r.id == record_id,
                lambda r: self._resource.patch(r, reverts),
            )
        self._log.step(SyncStage.ROLLBACK, "Fields reverted", id=record_id, fields=",".join(reverts))
        return self._store.find(scope, record_id)

    # ── Outcomes ─────────────────────────────────────────────────────

    @staticmethod
    def _as_sync_error(exc: Exception) -> SyncError:
        if isinstance(exc, SyncError):
            return exc
        logger.exception("Unexpected failure during mutation")
        return NetworkError(f"Unexpected error: {exc}")

    def _reject(self, exc: SyncError) -> MutationOutcome:
        self._log.step_error(SyncStage.VALIDATE, "Edit rejected", exc)
        self._notify_error("Invalid input", getattr(exc, "message", str(exc)), retryable=False)
        return MutationOutcome(MutationStatus.REJECTED, error=exc)

    def _failure(self, error: SyncError, record: Record | None, *, action: str) -> MutationOutcome:
        if isinstance(error, SessionExpiredError):
            self._notify_error("Session expired", "Please sign in again.", retryable=False)
            return MutationOutcome(MutationStatus.SESSION_EXPIRED, record, error)

        self._log.step_error(SyncStage.ROLLBACK, f"Could not {action} {self._resource.label}", error)
        self._notify_error(
            "Error",
            f"Could not {action} {self._resource.label.lower()}: {getattr(error, 'message', error)}",
            retryable=error.retryable,
        )
        return MutationOutcome(MutationStatus.ROLLED_BACK, record, error)

    def _notify_success(self, message: str) -> None:
        if self._notifier is not None:
            self._notifier.success("Saved", message)

    def _notify_error(self, title: str, message: str, *, retryable: bool) -> None:
        if self._notifier is not None:
            self._notifier.error(title, message, retryable=retryable)
