"""Rounds grid — patrol and position-change stamps per resident and hour.

Rows are only ever created by stamping a cell, so no placeholders are
synthesized for empty cells.
"""

from .base import ResourceConfig
from care_sync.application.schemas import RoundRecordFields, RoundRecordResponse

ROUND_RECORDS = ResourceConfig(
    name="round-records",
    label="Round records",
    fields_schema=RoundRecordFields,
    response_schema=RoundRecordResponse,
    dimension_fields=("record_date", "hour", "record_type"),
)
