"""Vital signs grid — one row per resident, day and timing slot."""

from collections.abc import Iterable
from datetime import date
from typing import Any

from care_sync.application.schemas import VitalSignFields, VitalSignResponse
from care_sync.domain.entities import Owner, ProjectionFilters, Resident, Timing

from .base import ResourceConfig

_DEFAULT_TIMINGS = (Timing.MORNING.value, Timing.AFTERNOON.value)


def expected_vital_slots(
    filters: ProjectionFilters, owner: Owner, until: date | None
) -> Iterable[tuple[Any, ...]]:
    """Every resident gets a card per day up to today, for the selected timing.

    Without a timing filter the two scheduled rounds (morning, afternoon) are
    expected; ad-hoc and previous-day entries are only ever added explicitly.
    """
    if not isinstance(owner, Resident):
        return
    timings = (filters.timing,) if filters.timing else _DEFAULT_TIMINGS
    for day in filters.dates():
        if until is not None and day > until:
            break
        for timing in timings:
            yield (day, timing)


VITAL_SIGNS = ResourceConfig(
    name="vital-signs",
    label="Vital signs",
    fields_schema=VitalSignFields,
    response_schema=VitalSignResponse,
    dimension_fields=("record_date", "timing"),
    timing_field="timing",
    expected_dimensions=expected_vital_slots,
)
