"""Pydantic DTOs for round records (patrol and position change stamps)."""

from typing import Literal

from pydantic import Field

from .common import FacilityDate, RecordFields, RecordResponse

RoundType = Literal["patrol", "position_change"]


class RoundRecordFields(RecordFields):
    """Editable round record columns."""

    resident_id: str | None = None
    record_date: FacilityDate | None = None
    hour: int | None = Field(None, ge=0, le=23)
    record_type: RoundType | None = None
    staff_name: str | None = Field(None, max_length=20)
    position_value: Literal["右", "左", "仰"] | None = None
    notes: str | None = None


class RoundRecordResponse(RoundRecordFields, RecordResponse):
    """Round row returned by the backend."""

    model_config = RecordResponse.model_config
