"""Tests for the record store."""

import pytest

from projektmester.records import (
    InvalidRecordError,
    RecordKind,
    RecordStore,
    UnknownKindError,
)


class TestLoadAndSave:
    """Tests for load_all / save_all."""

    def test_empty_kind_loads_empty_list(self, store):
        """Should return [] for a kind with no records."""
        assert store.load_all(RecordKind.PROJECTS) == []

    def test_save_all_replaces_collection_in_order(self, store):
        """Should replace the whole kind and keep the given order."""
        store.save_all(RecordKind.TASKS, [{"id": "a"}, {"id": "b"}])
        store.save_all(RecordKind.TASKS, [{"id": "c", "x": 1}, {"id": "a", "x": 2}])

        assert store.load_all(RecordKind.TASKS) == [{"id": "c", "x": 1}, {"id": "a", "x": 2}]

    def test_kinds_are_isolated(self, store):
        """Should scope records by kind; the same id may exist in two kinds."""
        store.save_all(RecordKind.TASKS, [{"id": "x", "kind": "task"}])
        store.save_all(RecordKind.COSTS, [{"id": "x", "kind": "cost"}])

        assert store.load_all("tasks") == [{"id": "x", "kind": "task"}]
        assert store.load_all("costs") == [{"id": "x", "kind": "cost"}]

    def test_returned_records_are_snapshots(self, store):
        """Should not let callers mutate stored data through returned objects."""
        store.save_all(RecordKind.PROJECTS, [{"id": "p1", "assigned_users": ["u1"]}])
        loaded = store.load_all(RecordKind.PROJECTS)
        loaded[0]["assigned_users"].append("u2")

        assert store.get(RecordKind.PROJECTS, "p1") == {"id": "p1", "assigned_users": ["u1"]}

    def test_duplicate_ids_rejected(self, store):
        """Should refuse a collection with duplicate ids."""
        with pytest.raises(InvalidRecordError):
            store.save_all(RecordKind.TASKS, [{"id": "a"}, {"id": "a"}])

    def test_unknown_kind(self, store):
        """Should raise UnknownKindError for unsupported kinds."""
        with pytest.raises(UnknownKindError):
            store.load_all("invoices")


class TestUpsertAndDelete:
    """Tests for upsert / delete_by_id."""

    def test_upsert_appends_new_record(self, store):
        """Should append a record whose id is not yet stored."""
        store.upsert(RecordKind.MATERIALS, {"id": "m1", "name": "Csempe"})
        store.upsert(RecordKind.MATERIALS, {"id": "m2", "name": "Fuga"})

        assert [r["id"] for r in store.load_all(RecordKind.MATERIALS)] == ["m1", "m2"]

    def test_upsert_replaces_in_place(self, store):
        """Should replace a record by id without moving it."""
        store.save_all(RecordKind.MATERIALS, [{"id": "m1", "name": "A"}, {"id": "m2", "name": "B"}])
        store.upsert(RecordKind.MATERIALS, {"id": "m1", "name": "A2"})

        assert store.load_all(RecordKind.MATERIALS) == [{"id": "m1", "name": "A2"}, {"id": "m2", "name": "B"}]

    def test_upsert_requires_id(self, store):
        """Should reject records without a non-empty string id."""
        with pytest.raises(InvalidRecordError):
            store.upsert(RecordKind.COSTS, {"amount": 100})
        with pytest.raises(InvalidRecordError):
            store.upsert(RecordKind.COSTS, {"id": ""})

    def test_delete_by_id(self, store):
        """Should delete only the matching record."""
        store.save_all(RecordKind.COSTS, [{"id": "c1"}, {"id": "c2"}])

        assert store.delete_by_id(RecordKind.COSTS, "c1") is True
        assert store.load_all(RecordKind.COSTS) == [{"id": "c2"}]

    def test_delete_missing_is_noop(self, store):
        """Should return False and change nothing for a missing id."""
        store.save_all(RecordKind.COSTS, [{"id": "c1"}])

        assert store.delete_by_id(RecordKind.COSTS, "nope") is False
        assert store.load_all(RecordKind.COSTS) == [{"id": "c1"}]

    def test_data_survives_new_store_instance(self, db):
        """Should persist through the session, not through the store object."""
        RecordStore(db).upsert(RecordKind.USERS, {"id": "u1", "email": "a@b.hu"})

        assert RecordStore(db).get(RecordKind.USERS, "u1") == {"id": "u1", "email": "a@b.hu"}
