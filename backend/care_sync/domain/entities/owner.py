"""Domain entities for record owners — residents and staff members."""

import re
from dataclasses import dataclass, field
from datetime import date

_DIGITS = re.compile(r"\d+")


def display_number_key(value: str | int | None) -> tuple[int, int, str]:
    """Sort key ordering numbered labels numerically, then lexically.

    ``"2"``, ``"10"``, ``"1"`` sort as ``1, 2, 10``; labels without any digit
    ("A棟") come after every numbered label and compare as plain strings.
    """
    text = "" if value is None else str(value).strip()
    digits = "".join(_DIGITS.findall(text))
    if digits:
        return (0, int(digits), text)
    return (1, 0, text)


def is_all_floors(selected_floor: str | None) -> bool:
    return selected_floor is None or selected_floor.strip() in ("", "all", "全階")


def match_floor(owner_floor: str | None, selected_floor: str | None) -> bool:
    """Check whether an owner's floor matches the selected floor filter.

    Master data spells floors as ``"1"``, ``"1F"`` or ``"1階"``; all three
    match each other. ``None``, ``""`` and ``"all"``/``"全階"`` select every floor.
    """
    if is_all_floors(selected_floor):
        return True
    if not owner_floor:
        return False

    owner_text = str(owner_floor).strip()
    selected_text = selected_floor.strip()
    if owner_text == selected_text:
        return True

    owner_digits = "".join(_DIGITS.findall(owner_text))
    selected_digits = "".join(_DIGITS.findall(selected_text))
    return bool(owner_digits) and owner_digits == selected_digits


@dataclass(frozen=True)
class Resident:
    """A facility resident — owner of vitals, bathing and round records.

    ``bath_weekdays`` uses ``date.weekday()`` numbering (Monday is 0).
    """

    id: str
    name: str
    room_number: str | None = None
    floor: str | None = None
    bath_weekdays: frozenset[int] = field(default_factory=frozenset)
    is_admitted: bool = False

    @property
    def display_order(self) -> tuple[int, int, str]:
        return display_number_key(self.room_number)

    def bathes_on(self, day: date) -> bool:
        return day.weekday() in self.bath_weekdays


@dataclass(frozen=True)
class StaffMember:
    """A staff master-data row. Staff rows own themselves."""

    id: str
    staff_id: str
    staff_name: str
    floor: str | None = None
    job_role: str | None = None
    sort_order: int = 0

    @property
    def display_order(self) -> tuple[int, int, str]:
        return (0, self.sort_order, self.staff_name)


Owner = Resident | StaffMember
