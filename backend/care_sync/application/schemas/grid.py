"""Pydantic DTOs for the grid endpoints of the presentation layer."""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field


class GridScopeParams(BaseModel):
    """Date range identifying the fetched collection an edit applies to."""

    date_from: date | None = None
    date_to: date | None = None


class GridEditRequest(GridScopeParams):
    """One cell edit (or several, via ``changes``) of a grid row."""

    row_id: str = Field(..., min_length=1)
    field: str | None = None
    value: Any = None
    changes: dict[str, Any] | None = None

    def as_changes(self) -> dict[str, Any]:
        if self.changes:
            return dict(self.changes)
        if self.field is None:
            return {}
        return {self.field: self.value}


class GridCreateRequest(GridScopeParams):
    """An explicitly added row, e.g. a round stamp or a new staff member."""

    owner_id: str = ""
    dimension: list[Any] = Field(default_factory=list)
    fields: dict[str, Any] = Field(default_factory=dict)


class NotificationSchema(BaseModel):
    level: str
    title: str
    message: str
    retryable: bool = False


class GridRowsResponse(BaseModel):
    resource: str
    rows: list[dict[str, Any]]
    notifications: list[NotificationSchema] = Field(default_factory=list)


class OutcomeResponse(BaseModel):
    """Result of one mutation as shown to the grid."""

    status: str
    row: dict[str, Any] | None = None
    message: str | None = None
    notifications: list[NotificationSchema] = Field(default_factory=list)
