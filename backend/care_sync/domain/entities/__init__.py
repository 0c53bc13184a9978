from .record import PLACEHOLDER_PREFIX, Record, Timing, timing_order
from .owner import (
    Owner,
    Resident,
    StaffMember,
    display_number_key,
    is_all_floors,
    match_floor,
)
from .mutation import MutationOutcome, MutationStatus, PendingMutation
from .projection import ProjectionFilters
from .scope import RecordScope

__all__ = [
    "PLACEHOLDER_PREFIX",
    "Record",
    "Timing",
    "timing_order",
    "Owner",
    "Resident",
    "StaffMember",
    "display_number_key",
    "is_all_floors",
    "match_floor",
    "MutationOutcome",
    "MutationStatus",
    "PendingMutation",
    "ProjectionFilters",
    "RecordScope",
]
