"""ResourceConfig — the per-page description the synchronization core is parametrized by."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from pydantic import BaseModel, ValidationError

from care_sync.domain.entities import Owner, ProjectionFilters, Record, RecordScope
from care_sync.domain.exceptions import RecordValidationError

# (filters, owner, last synthesizable date or None) -> dimension keys the owner should have
DimensionRule = Callable[[ProjectionFilters, Owner, date | None], Iterable[tuple[Any, ...]]]


def no_expected_dimensions(
    filters: ProjectionFilters, owner: Owner, until: date | None
) -> Iterable[tuple[Any, ...]]:
    return ()


@dataclass(frozen=True)
class ResourceConfig:
    """Everything that differs between the vitals, bathing, rounds and staff grids.

    Attributes:
        name: REST collection segment, e.g. ``"vital-signs"``.
        label: Human-readable name used in notifications.
        fields_schema: pydantic model of the editable columns (all optional).
        response_schema: pydantic model of a backend row.
        owner_field: Column holding the owner id; ``"id"`` for self-owned rows.
        dimension_fields: Columns forming the dimension key, date first.
        timing_field: Column filtered and sorted by timing, if any.
        placeholder_defaults: Extra columns set on synthesized placeholders.
        expected_dimensions: Which slots an owner is expected to fill.
        requires_owner: Reject edits of a row whose owner is not assigned yet.
        date_bound: Whether scopes and filters carry a date range.
    """

    name: str
    label: str
    fields_schema: type[BaseModel]
    response_schema: type[BaseModel]
    owner_field: str = "resident_id"
    dimension_fields: tuple[str, ...] = ("record_date",)
    timing_field: str | None = None
    placeholder_defaults: Mapping[str, Any] = field(default_factory=dict)
    expected_dimensions: DimensionRule = no_expected_dimensions
    requires_owner: bool = True
    date_bound: bool = True

    # ── Record construction ──────────────────────────────────────────

    def build(self, record_id: str, fields: Mapping[str, Any]) -> Record:
        """Build a Record, deriving owner and dimension keys from its columns."""
        values = dict(fields)
        values.pop("id", None)
        if self.owner_field == "id":
            owner_key = record_id
        else:
            owner_key = values.get(self.owner_field) or ""
        dimension_key = tuple(values.get(name) for name in self.dimension_fields)
        return Record(
            id=record_id,
            owner_key=owner_key,
            dimension_key=dimension_key,
            fields=values,
        )

    def patch(self, record: Record, changes: Mapping[str, Any]) -> Record:
        return self.build(record.id, {**record.fields, **changes})

    def from_server(self, payload: Mapping[str, Any], *, partial: bool = False) -> Record:
        """Convert a backend row (Python field names or wire aliases) into a Record.

        With ``partial`` only the columns present in the payload are kept, so a
        sparse mutation response can be merged without blanking other fields.
        """
        model = self.response_schema.model_validate(dict(payload))
        values = model.model_dump(exclude_unset=partial)
        record_id = values.pop("id")
        return self.build(record_id, values)

    def placeholder(
        self,
        record_id: str,
        owner_key: str,
        dimension_key: tuple[Any, ...],
        extra: Mapping[str, Any] | None = None,
    ) -> Record:
        """Build an unsaved row for the ``(owner_key, dimension_key)`` slot."""
        values: dict[str, Any] = dict(self.placeholder_defaults)
        values.update(zip(self.dimension_fields, dimension_key))
        if self.owner_field != "id":
            values[self.owner_field] = owner_key or None
        if extra:
            values.update(extra)
        return self.build(record_id, values)

    def placeholder_from_parts(
        self, record_id: str, owner_key: str, parts: tuple[str, ...]
    ) -> Record:
        """Rebuild a placeholder from the text parts encoded in its id."""
        raw = {
            name: value
            for name, value in zip(self.dimension_fields, parts)
            if value != ""
        }
        try:
            coerced = self.fields_schema.model_validate(raw).model_dump(exclude_unset=True)
        except ValidationError as exc:
            raise RecordValidationError("id", f"Unreadable placeholder id '{record_id}'") from exc
        dimension_key = tuple(coerced.get(name) for name in self.dimension_fields)
        return self.placeholder(record_id, owner_key, dimension_key)

    # ── Validation & wire payloads ───────────────────────────────────

    def validate_changes(self, record: Record | None, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Validate and coerce field edits, raising RecordValidationError on failure."""
        if not changes:
            raise RecordValidationError("*", "No field given")
        if "id" in changes:
            raise RecordValidationError("id", "Record ids are assigned by the server")

        if self.requires_owner and self.owner_field != "id":
            owner_after = changes.get(self.owner_field, record.owner_key if record else None)
            if not owner_after and set(changes) - {self.owner_field}:
                raise RecordValidationError(
                    self.owner_field, "Select a resident before entering this record"
                )

        try:
            model = self.fields_schema.model_validate(dict(changes))
        except ValidationError as exc:
            first = exc.errors()[0]
            if len(changes) == 1:
                location = next(iter(changes))
            else:
                location = ".".join(str(part) for part in first.get("loc", ())) or "*"
            raise RecordValidationError(location, first.get("msg", "Invalid value")) from exc
        return model.model_dump(exclude_unset=True)

    def wire_payload(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Serialize Python-named values into the backend's JSON body."""
        model = self.fields_schema.model_validate(dict(values))
        return model.model_dump(mode="json", by_alias=True, exclude_unset=True)

    def create_payload(self, record: Record) -> dict[str, Any]:
        """Body of the create request for a placeholder — every column that has a value."""
        payload = {key: value for key, value in record.fields.items() if value is not None}
        payload.pop("created_at", None)
        payload.pop("updated_at", None)
        return payload

    # ── Scopes ───────────────────────────────────────────────────────

    def scope_for(self, filters: ProjectionFilters | None) -> RecordScope:
        if not self.date_bound or filters is None:
            return RecordScope(self.name)
        return RecordScope(self.name, filters.date_from, filters.last_date)
