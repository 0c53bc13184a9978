"""Unit tests for the PlaceholderGenerator."""

from datetime import date

import pytest

from care_sync.application.services import PlaceholderGenerator
from care_sync.domain.entities import PLACEHOLDER_PREFIX


@pytest.fixture
def generator() -> PlaceholderGenerator:
    return PlaceholderGenerator(clock=lambda: 1700000000.0)


def test_generate_is_deterministic_per_slot(generator: PlaceholderGenerator):
    first = generator.generate("r1", (date(2024, 1, 1), "午前"))
    second = generator.generate("r1", (date(2024, 1, 1), "午前"))

    assert first == second
    assert first.startswith(PLACEHOLDER_PREFIX)


def test_different_slots_get_different_ids(generator: PlaceholderGenerator):
    ids = {
        generator.generate("r1", (date(2024, 1, 1), "午前")),
        generator.generate("r1", (date(2024, 1, 1), "午後")),
        generator.generate("r2", (date(2024, 1, 1), "午前")),
        generator.generate("r1", (date(2024, 1, 2), "午前")),
    }
    assert len(ids) == 4


def test_owner_ids_with_separators_round_trip(generator: PlaceholderGenerator):
    """Owner ids may contain dashes or the part separator itself."""
    owner = "res-42|east#2"
    record_id = generator.generate(owner, (date(2024, 1, 1), "臨時"))

    parsed_owner, parts, stamp = generator.parse(record_id)

    assert parsed_owner == owner
    assert parts == ("2024-01-01", "臨時")
    assert stamp is None


def test_generate_unique_never_repeats(generator: PlaceholderGenerator):
    """The clock is frozen, yet two explicit rows of one slot still differ."""
    dims = (date(2024, 1, 1), 14, "patrol")
    first = generator.generate_unique("r1", dims)
    second = generator.generate_unique("r1", dims)

    assert first != second
    owner, parts, stamp = generator.parse(first)
    assert owner == "r1"
    assert parts == ("2024-01-01", "14", "patrol")
    assert stamp == "1700000000000.0"


def test_missing_dimension_parts_encode_as_empty(generator: PlaceholderGenerator):
    record_id = generator.generate("", (None,))
    assert generator.parse(record_id) == ("", ("",), None)


def test_is_placeholder(generator: PlaceholderGenerator):
    assert generator.is_placeholder(generator.generate("r1", ()))
    assert not generator.is_placeholder("6f1c2a4e-0000-4000-8000-000000000000")
    assert not generator.is_placeholder("")
    assert not generator.is_placeholder(None)


def test_parse_rejects_server_ids(generator: PlaceholderGenerator):
    with pytest.raises(ValueError):
        generator.parse("v-123")
