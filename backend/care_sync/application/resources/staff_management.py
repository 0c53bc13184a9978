"""Staff master grid — not date-bound, each row owns itself."""

from .base import ResourceConfig
from care_sync.application.schemas import StaffFields, StaffResponse

STAFF_MANAGEMENT = ResourceConfig(
    name="staff-management",
    label="Staff",
    fields_schema=StaffFields,
    response_schema=StaffResponse,
    owner_field="id",
    dimension_fields=(),
    placeholder_defaults={"status": "ロック", "sort_order": 0},
    requires_owner=False,
    date_bound=False,
)
