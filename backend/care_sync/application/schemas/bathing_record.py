"""Pydantic DTOs for bathing records.

The backend keeps most bathing measurements as free-text columns, so they
stay strings here.
"""

from typing import Literal

from pydantic import Field

from care_sync.domain.entities import Timing

from .common import FacilityDate, RecordFields, RecordResponse

BathType = Literal["入浴", "シャワー浴", "清拭", "×"]


class BathingRecordFields(RecordFields):
    """Editable bathing record columns."""

    resident_id: str | None = None
    record_date: FacilityDate | None = None
    timing: Timing | None = None
    hour: str | None = Field(None, pattern=r"^\d{1,2}$")
    minute: str | None = Field(None, pattern=r"^\d{1,2}$")
    staff_name: str | None = Field(None, max_length=100)
    bath_type: BathType | None = None
    temperature: str | None = None
    weight: str | None = None
    blood_pressure_systolic: str | None = None
    blood_pressure_diastolic: str | None = None
    pulse_rate: str | None = None
    oxygen_saturation: str | None = None
    notes: str | None = None
    rejection_reason: str | None = None
    nursing_check: bool | None = None


class BathingRecordResponse(BathingRecordFields, RecordResponse):
    """Bathing row returned by the backend."""

    model_config = RecordResponse.model_config
