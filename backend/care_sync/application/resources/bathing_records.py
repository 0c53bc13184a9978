"""Bathing grid — residents get a row on their scheduled bath weekdays."""

from collections.abc import Iterable
from datetime import date
from typing import Any

from care_sync.application.schemas import BathingRecordFields, BathingRecordResponse
from care_sync.domain.entities import Owner, ProjectionFilters, Resident, Timing

from .base import ResourceConfig


def expected_bath_slots(
    filters: ProjectionFilters, owner: Owner, until: date | None
) -> Iterable[tuple[Any, ...]]:
    # Bath schedules are known ahead, so future days are listed too
    if not isinstance(owner, Resident):
        return
    if filters.timing and filters.timing != Timing.MORNING.value:
        return
    for day in filters.dates():
        if owner.bathes_on(day):
            yield (day, Timing.MORNING.value)


BATHING_RECORDS = ResourceConfig(
    name="bathing-records",
    label="Bathing records",
    fields_schema=BathingRecordFields,
    response_schema=BathingRecordResponse,
    dimension_fields=("record_date", "timing"),
    timing_field="timing",
    placeholder_defaults={"nursing_check": False},
    expected_dimensions=expected_bath_slots,
)
