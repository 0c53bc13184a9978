"""Unit tests for the ProjectionService (filtering, placeholder synthesis, ordering)."""

from datetime import date

import pytest

from care_sync.application.resources import (
    BATHING_RECORDS,
    ROUND_RECORDS,
    STAFF_MANAGEMENT,
    VITAL_SIGNS,
)
from care_sync.application.services import PlaceholderGenerator, ProjectionService
from care_sync.domain.entities import ProjectionFilters, Resident, StaffMember

DAY = date(2024, 1, 1)  # a Monday

RESIDENTS = [
    Resident(id="r10", name="Suzuki", room_number="10", floor="1階"),
    Resident(id="r2", name="Sato", room_number="2", floor="1F"),
    Resident(id="r1", name="Tanaka", room_number="1", floor="1"),
    Resident(id="r3", name="Ito", room_number="301", floor="3階"),
]


def _vitals(**kwargs) -> ProjectionService:
    return ProjectionService(VITAL_SIGNS, today=lambda: DAY, **kwargs)


def _vital_row(record_id: str, resident_id: str, timing: str = "午前", day: date = DAY, **fields):
    return VITAL_SIGNS.build(
        record_id, {"resident_id": resident_id, "record_date": day, "timing": timing, **fields}
    )


# ── Synthesis & de-duplication ──


def test_owners_not_loaded_renders_nothing():
    rows = _vitals().project([_vital_row("v-1", "r1")], ProjectionFilters(DAY), None)
    assert rows == []


def test_every_resident_gets_morning_and_afternoon_placeholders():
    rows = _vitals().project([], ProjectionFilters(DAY), RESIDENTS)

    assert len(rows) == len(RESIDENTS) * 2
    assert all(row.pending for row in rows)


def test_real_record_hides_its_placeholder():
    real = _vital_row("v-1", "r1", pulse_rate=70)

    rows = _vitals().project([real], ProjectionFilters(DAY, timing="午前"), RESIDENTS)

    r1_rows = [row for row in rows if row.owner_key == "r1"]
    assert r1_rows == [real]


def test_synthesis_is_idempotent():
    service = _vitals()
    filters = ProjectionFilters(DAY)

    first = service.project([], filters, RESIDENTS)
    second = service.project(first, filters, RESIDENTS)

    assert [row.id for row in first] == [row.id for row in second]


def test_stored_placeholder_is_not_duplicated():
    """An edited placeholder sitting in the store replaces the synthesized one."""
    placeholder_id = PlaceholderGenerator().generate("r1", (DAY, "午前"))
    edited = VITAL_SIGNS.placeholder(placeholder_id, "r1", (DAY, "午前"), {"temperature": 36.5})

    rows = _vitals().project([edited], ProjectionFilters(DAY, timing="午前"), RESIDENTS)

    matching = [row for row in rows if row.id == placeholder_id]
    assert matching == [edited]


def test_multiple_real_records_in_one_slot_are_kept():
    first = _vital_row("v-1", "r1")
    second = _vital_row("v-2", "r1")

    rows = _vitals().project([first, second], ProjectionFilters(DAY, timing="午前"), RESIDENTS)

    assert {row.id for row in rows if row.owner_key == "r1"} == {"v-1", "v-2"}


def test_explicitly_added_row_is_not_hidden_by_real_record():
    """A second ad-hoc entry of the same day stays visible while it is being saved."""
    saved = _vital_row("v-1", "r1", timing="臨時")
    added_id = PlaceholderGenerator().generate_unique("r1", (DAY, "臨時"))
    added = VITAL_SIGNS.placeholder(added_id, "r1", (DAY, "臨時"), {"pulse_rate": 90})

    filters = ProjectionFilters(DAY, timing="臨時", resident_id="r1")

    rows = _vitals().project([saved, added], filters, RESIDENTS)

    assert [row.id for row in rows] == ["v-1", added_id]


def test_future_days_are_not_synthesized_by_default():
    filters = ProjectionFilters(DAY, date(2024, 1, 3), timing="午前")

    rows = _vitals().project([], filters, RESIDENTS[:1])

    assert [row.record_date for row in rows] == [DAY]


def test_future_days_synthesized_when_enabled():
    filters = ProjectionFilters(DAY, date(2024, 1, 3), timing="午前")

    rows = _vitals(synthesize_future_dates=True).project([], filters, RESIDENTS[:1])

    assert [row.record_date for row in rows] == [DAY, date(2024, 1, 2), date(2024, 1, 3)]


def test_bathing_rows_follow_bath_weekdays():
    monday_bather = Resident(id="r1", name="Tanaka", room_number="1", bath_weekdays=frozenset({0}))
    tuesday_bather = Resident(id="r2", name="Sato", room_number="2", bath_weekdays=frozenset({1}))
    service = ProjectionService(BATHING_RECORDS, today=lambda: DAY)

    rows = service.project([], ProjectionFilters(DAY, date(2024, 1, 2)), [monday_bather, tuesday_bather])

    assert [(row.owner_key, row.record_date) for row in rows] == [
        ("r1", DAY),
        ("r2", date(2024, 1, 2)),
    ]
    assert all(row.get("nursing_check") is False for row in rows)


def test_rounds_are_never_synthesized():
    service = ProjectionService(ROUND_RECORDS, today=lambda: DAY)
    assert service.project([], ProjectionFilters(DAY), RESIDENTS) == []


# ── Filtering ──


@pytest.mark.parametrize("selected", ["1", "1F", "1階"])
def test_floor_spellings_match_each_other(selected: str):
    rows = _vitals().project([], ProjectionFilters(DAY, floor=selected, timing="午前"), RESIDENTS)
    assert {row.owner_key for row in rows} == {"r1", "r2", "r10"}


@pytest.mark.parametrize("selected", [None, "", "all", "全階"])
def test_all_floors_selection(selected):
    rows = _vitals().project([], ProjectionFilters(DAY, floor=selected, timing="午前"), RESIDENTS)
    assert len(rows) == len(RESIDENTS)


def test_records_outside_date_range_are_hidden():
    old = _vital_row("v-old", "r1", day=date(2023, 12, 31))
    rows = _vitals().project([old], ProjectionFilters(DAY), RESIDENTS)
    assert "v-old" not in {row.id for row in rows}


def test_timing_filter():
    morning = _vital_row("v-1", "r1", timing="午前")
    afternoon = _vital_row("v-2", "r1", timing="午後")

    rows = _vitals().project([morning, afternoon], ProjectionFilters(DAY, timing="午後"), RESIDENTS)

    assert "v-1" not in {row.id for row in rows}
    assert "v-2" in {row.id for row in rows}


def test_resident_filter():
    rows = _vitals().project([], ProjectionFilters(DAY, resident_id="r2"), RESIDENTS)
    assert {row.owner_key for row in rows} == {"r2"}


def test_unowned_pending_row_stays_visible():
    unowned = VITAL_SIGNS.placeholder("temp-|2024-01-01|臨時#1.0", "", (DAY, "臨時"))

    rows = _vitals().project([unowned], ProjectionFilters(DAY, floor="1階"), RESIDENTS)

    assert unowned in rows


# ── Ordering ──


def test_rooms_sort_numerically_then_timing():
    rows = _vitals().project([], ProjectionFilters(DAY, floor="1階"), RESIDENTS)

    assert [(row.owner_key, row.get("timing")) for row in rows] == [
        ("r1", "午前"),
        ("r1", "午後"),
        ("r2", "午前"),
        ("r2", "午後"),
        ("r10", "午前"),
        ("r10", "午後"),
    ]


def test_dates_sort_before_rooms():
    service = _vitals(synthesize_future_dates=True)
    filters = ProjectionFilters(DAY, date(2024, 1, 2), timing="午前", floor="1階")

    rows = service.project([], filters, RESIDENTS)

    assert [(row.record_date.day, row.owner_key) for row in rows] == [
        (1, "r1"),
        (1, "r2"),
        (1, "r10"),
        (2, "r1"),
        (2, "r2"),
        (2, "r10"),
    ]


def test_round_hours_sort_numerically():
    rows = [
        ROUND_RECORDS.build(
            f"rd-{hour}",
            {"resident_id": "r1", "record_date": DAY, "hour": hour, "record_type": "patrol"},
        )
        for hour in (14, 2, 9)
    ]
    service = ProjectionService(ROUND_RECORDS, today=lambda: DAY)

    projected = service.project(rows, ProjectionFilters(DAY), RESIDENTS)

    assert [row.get("hour") for row in projected] == [2, 9, 14]


def test_staff_sorted_by_sort_order():
    staff_rows = [
        STAFF_MANAGEMENT.build("s-1", {"staff_name": "B", "sort_order": 2, "floor": "1階"}),
        STAFF_MANAGEMENT.build("s-2", {"staff_name": "A", "sort_order": 1, "floor": "2階"}),
    ]
    owners = [
        StaffMember(id="s-1", staff_id="b", staff_name="B", floor="1階", sort_order=2),
        StaffMember(id="s-2", staff_id="a", staff_name="A", floor="2階", sort_order=1),
    ]
    service = ProjectionService(STAFF_MANAGEMENT, today=lambda: DAY)

    rows = service.project(staff_rows, ProjectionFilters(DAY), owners)

    assert [row.id for row in rows] == ["s-2", "s-1"]
