"""Pydantic DTOs for vital sign records."""

from pydantic import Field

from care_sync.domain.entities import Timing

from .common import FacilityDate, RecordFields, RecordResponse


class VitalSignFields(RecordFields):
    """Editable vital sign columns."""

    resident_id: str | None = None
    record_date: FacilityDate | None = None
    timing: Timing | None = None
    hour: int | None = Field(None, ge=0, le=23)
    minute: int | None = Field(None, ge=0, le=59)
    staff_name: str | None = Field(None, max_length=100)
    temperature: float | None = Field(None, ge=30, le=45)
    blood_pressure_systolic: int | None = Field(None, ge=0, le=300)
    blood_pressure_diastolic: int | None = Field(None, ge=0, le=300)
    pulse_rate: int | None = Field(None, ge=0, le=300)
    respiration_rate: int | None = Field(None, ge=0, le=100)
    oxygen_saturation: float | None = Field(None, ge=0, le=100)
    blood_sugar: str | None = None
    notes: str | None = None


class VitalSignResponse(VitalSignFields, RecordResponse):
    """Vital sign row returned by the backend."""

    model_config = RecordResponse.model_config
