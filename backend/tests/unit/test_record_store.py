"""Unit tests for the RecordStore."""

from datetime import date

import pytest

from care_sync.application.services import RecordStore
from care_sync.domain.entities import Record, RecordScope

SCOPE = RecordScope("vital-signs", date(2024, 1, 1), date(2024, 1, 1))


def _record(record_id: str, **fields) -> Record:
    return Record(id=record_id, owner_key="r1", dimension_key=(date(2024, 1, 1),), fields=fields)


@pytest.fixture
def store() -> RecordStore:
    store = RecordStore()
    store.set(SCOPE, [_record("a", pulse_rate=70), _record("b", pulse_rate=80)])
    return store


def test_unknown_scope_is_empty():
    store = RecordStore()
    assert store.get(SCOPE) == ()
    assert not store.has(SCOPE)
    assert store.version(SCOPE) == 0


def test_patch_returns_new_collection_and_keeps_snapshot(store: RecordStore):
    snapshot = store.get(SCOPE)

    patched = store.patch(
        SCOPE,
        lambda r: r.id == "a",
        lambda r: Record(r.id, r.owner_key, r.dimension_key, {**r.fields, "pulse_rate": 99}),
    )

    assert patched is store.get(SCOPE)
    assert patched is not snapshot
    assert snapshot[0].get("pulse_rate") == 70
    assert store.find(SCOPE, "a").get("pulse_rate") == 99
    # Untouched records are shared between collections
    assert patched[1] is snapshot[1]


def test_patch_without_match_changes_nothing(store: RecordStore):
    before = store.get(SCOPE)
    version = store.version(SCOPE)

    after = store.patch(SCOPE, lambda r: r.id == "missing", lambda r: r)

    assert after is before
    assert store.version(SCOPE) == version


def test_insert_replaces_same_id(store: RecordStore):
    store.insert(SCOPE, _record("a", pulse_rate=1))
    store.insert(SCOPE, _record("c"))

    ids = [r.id for r in store.get(SCOPE)]
    assert ids == ["b", "a", "c"]
    assert store.find(SCOPE, "a").get("pulse_rate") == 1


def test_restore_is_a_reference_swap(store: RecordStore):
    snapshot = store.get(SCOPE)
    store.remove(SCOPE, "a")

    restored = store.restore(SCOPE, snapshot)

    assert restored is snapshot
    assert store.get(SCOPE) is snapshot


def test_remove_missing_record_is_a_no_op(store: RecordStore):
    before = store.get(SCOPE)
    assert store.remove(SCOPE, "zzz") is before


def test_invalidate_drops_scope_and_bumps_version(store: RecordStore):
    version = store.version(SCOPE)

    store.invalidate(SCOPE)

    assert not store.has(SCOPE)
    assert store.get(SCOPE) == ()
    assert store.version(SCOPE) == version + 1
    assert store.scopes() == []
