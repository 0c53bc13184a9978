"""Filter/Projection Layer — derives the visible rows of a grid."""

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from care_sync.application.resources import ResourceConfig
from care_sync.config import get_settings
from care_sync.domain.entities import (
    Owner,
    ProjectionFilters,
    Record,
    is_all_floors,
    match_floor,
    timing_order,
)

from .placeholder_generator import PlaceholderGenerator

logger = logging.getLogger(__name__)

_UNKNOWN_OWNER_ORDER = (2, 0, "")


def facility_today() -> date:
    return datetime.now(ZoneInfo(get_settings().facility_timezone)).date()


def _part_key(part: Any) -> tuple[int, float, str]:
    if isinstance(part, (int, float)) and not isinstance(part, bool):
        return (0, part, "")
    return (1, 0, "" if part is None else str(part))


class ProjectionService:
    """Computes ``project(all_records, filters, expected_owners) -> visible rows``.

    1. keep the records matching the filters,
    2. synthesize placeholders for expected-but-missing slots,
    3. de-duplicate by slot, real records winning,
    4. sort by date, owner display order, timing.
    """

    def __init__(
        self,
        resource: ResourceConfig,
        *,
        placeholders: PlaceholderGenerator | None = None,
        today: Callable[[], date] = facility_today,
        synthesize_future_dates: bool = False,
    ):
        self._resource = resource
        self._placeholders = placeholders or PlaceholderGenerator()
        self._today = today
        self._synthesize_future_dates = synthesize_future_dates

    def project(
        self,
        all_records: Iterable[Record],
        filters: ProjectionFilters,
        expected_owners: Sequence[Owner] | None,
    ) -> list[Record]:
        # Owners not loaded yet: render nothing rather than a partial grid
        if expected_owners is None:
            return []

        owners = {owner.id: owner for owner in expected_owners}
        visible = [r for r in all_records if self._matches(r, filters, owners)]

        real_slots = {r.slot for r in visible if not r.pending}
        taken_ids = {r.id for r in visible}
        rows = [r for r in visible if not self._superseded(r, real_slots)]

        synthesized = 0
        for placeholder in self._synthesize(filters, owners.values()):
            if placeholder.slot in real_slots or placeholder.id in taken_ids:
                continue
            taken_ids.add(placeholder.id)
            rows.append(placeholder)
            synthesized += 1

        logger.debug(
            "Projected %s: %d rows (%d placeholders)", self._resource.name, len(rows), synthesized
        )
        return sorted(rows, key=lambda r: self._sort_key(r, owners))

    # ── Filtering ────────────────────────────────────────────────────

    def _matches(self, record: Record, filters: ProjectionFilters, owners: dict[str, Owner]) -> bool:
        resource = self._resource
        if resource.date_bound and not filters.covers(record.record_date):
            return False
        if filters.timing and resource.timing_field:
            if record.get(resource.timing_field) != filters.timing:
                return False

        # Rows added by hand wait for an owner; keep them on screen
        if not record.owner_key and record.pending:
            return True

        if filters.resident_id and record.owner_key != filters.resident_id:
            return False
        if not is_all_floors(filters.floor):
            owner = owners.get(record.owner_key)
            if owner is None:
                # Unsaved self-owned rows (new staff) have no master data yet
                return record.pending and record.owner_key == record.id
            if not match_floor(owner.floor, filters.floor):
                return False
        return True

    def _superseded(self, record: Record, real_slots: set) -> bool:
        """A slot placeholder gives way to the real record of its slot; rows added explicitly never do."""
        if not record.pending or record.slot not in real_slots:
            return False
        _, _, stamp = self._placeholders.parse(record.id)
        return stamp is None

    def _owner_selected(self, owner: Owner, filters: ProjectionFilters) -> bool:
        if filters.resident_id and owner.id != filters.resident_id:
            return False
        return match_floor(owner.floor, filters.floor)

    # ── Placeholder synthesis ────────────────────────────────────────

    def _synthesize(self, filters: ProjectionFilters, owners: Iterable[Owner]) -> Iterable[Record]:
        until = None if self._synthesize_future_dates else self._today()
        for owner in owners:
            if not self._owner_selected(owner, filters):
                continue
            for dimension_key in self._resource.expected_dimensions(filters, owner, until):
                record_id = self._placeholders.generate(owner.id, dimension_key)
                yield self._resource.placeholder(record_id, owner.id, dimension_key)

    # ── Ordering ─────────────────────────────────────────────────────

    def _sort_key(self, record: Record, owners: dict[str, Owner]) -> tuple[Any, ...]:
        owner = owners.get(record.owner_key)
        owner_order = owner.display_order if owner is not None else _UNKNOWN_OWNER_ORDER
        timing_field = self._resource.timing_field
        timing_rank = timing_order(record.get(timing_field)) if timing_field else 0
        rest = tuple(_part_key(part) for part in record.dimension_key[1:])
        return (
            record.record_date or date.min,
            owner_order,
            timing_rank,
            rest,
            record.pending,
            record.id,
        )
