"""Pydantic DTOs for resident master data (read-only here)."""

from .common import WireModel

_WEEKDAY_COLUMNS = (
    "bath_monday",
    "bath_tuesday",
    "bath_wednesday",
    "bath_thursday",
    "bath_friday",
    "bath_saturday",
    "bath_sunday",
)


class ResidentResponse(WireModel):
    """Resident row returned by the backend."""

    model_config = {"extra": "ignore"}

    id: str
    name: str
    room_number: str | None = None
    floor: str | None = None
    is_admitted: bool | None = False
    bath_monday: bool | None = False
    bath_tuesday: bool | None = False
    bath_wednesday: bool | None = False
    bath_thursday: bool | None = False
    bath_friday: bool | None = False
    bath_saturday: bool | None = False
    bath_sunday: bool | None = False

    def bath_weekdays(self) -> frozenset[int]:
        """Weekday numbers (Monday is 0) flagged as bath days."""
        return frozenset(
            index for index, column in enumerate(_WEEKDAY_COLUMNS) if getattr(self, column)
        )
