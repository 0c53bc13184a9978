"""Pydantic DTOs for staff master data."""

from typing import Literal

from pydantic import Field

from .common import RecordFields, RecordResponse


class StaffFields(RecordFields):
    """Editable staff columns."""

    staff_id: str | None = Field(None, pattern=r"^[a-zA-Z0-9]+$")
    staff_name: str | None = Field(None, min_length=1)
    staff_name_kana: str | None = Field(None, pattern=r"^[ァ-ヶー\s]+$")
    floor: Literal["全階", "1階", "2階", "3階"] | None = None
    job_role: Literal["全体", "介護", "施設看護", "訪問看護"] | None = None
    authority: str | None = None
    status: Literal["ロック", "ロック解除"] | None = None
    sort_order: int | None = None


class StaffResponse(StaffFields, RecordResponse):
    """Staff row returned by the backend."""

    model_config = RecordResponse.model_config
