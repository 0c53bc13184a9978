"""Shared pydantic building blocks for care record DTOs."""

from datetime import date, datetime
from typing import Annotated, Any
from zoneinfo import ZoneInfo

from pydantic import BaseModel, BeforeValidator, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from care_sync.config import get_settings


def _to_facility_date(value: Any) -> Any:
    """Turn a server timestamp into the facility-local calendar date.

    The backend stores ``recordDate`` as a timestamp, so ``2023-12-31T15:00:00Z``
    is 1 January in Tokyo. Plain ``YYYY-MM-DD`` strings pass through untouched.
    """
    if isinstance(value, str) and "T" in value:
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(ZoneInfo(get_settings().facility_timezone)).date()
    return value


FacilityDate = Annotated[date, BeforeValidator(_to_facility_date)]


class WireModel(BaseModel):
    """Base for every care record DTO — camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        # Grid selects post "" when a value is cleared
        if isinstance(value, str) and not value.strip():
            return None
        return value


class RecordFields(WireModel):
    """Editable fields of a record; every field optional, unknown fields rejected."""

    model_config = ConfigDict(extra="forbid")


class RecordResponse(WireModel):
    """A record as returned by the backend. Columns we do not model are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
