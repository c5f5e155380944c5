#!/usr/bin/env python3
"""Tests for RecordStore operations."""

import itertools
import json
import re

import pytest

from models import (
    InvalidCost,
    InvalidDate,
    InvalidMaintenance,
    InvalidMileage,
    InvalidNotes,
    NotFound,
    RecordFields,
    RecordStore,
    make_id,
)


@pytest.fixture
def store(tmp_path):
    counter = itertools.count(1)
    return RecordStore(tmp_path / "entries.json", id_factory=lambda: f"id{next(counter)}")


def fields(date="2024-01-15", maintenance="Oil change", mileage="", cost="45"):
    return RecordFields(date=date, maintenance=maintenance, mileage=mileage, cost=cost)


class TestMakeId:
    """Tests for make_id."""

    def test_url_safe(self):
        assert re.fullmatch(r"[0-9a-z]+", make_id())

    def test_rapid_calls_do_not_collide(self):
        ids = {make_id() for _ in range(500)}
        assert len(ids) == 500


class TestList:
    """Tests for RecordStore.list."""

    def test_empty_store(self, store):
        assert store.list() == []

    def test_sorted_by_date_then_id(self, tmp_path):
        path = tmp_path / "entries.json"
        path.write_text(json.dumps({"entries": [
            {"id": "c", "date": "2024-03-01", "maintenance": "Chain", "cost": 1},
            {"id": "b", "date": "2024-03-01", "maintenance": "Tires", "cost": 1},
            {"id": "a", "date": "2024-01-15", "maintenance": "Oil", "cost": 1},
        ], "notes": ""}))
        assert [r.id for r in RecordStore(path).list()] == ["a", "b", "c"]


class TestCreate:
    """Tests for RecordStore.create."""

    def test_returns_sorted_document(self, store):
        store.create(fields(date="2024-03-01"))
        document = store.create(fields(date="2024-01-15"))
        assert [r.id for r in document.entries] == ["id2", "id1"]

    def test_stores_canonical_values(self, store):
        store.create(fields(maintenance="  Oil change  ", mileage="1,000 mi", cost="$45.499"))
        [record] = store.list()
        assert record.id == "id1"
        assert record.date == "2024-01-15"
        assert record.maintenance == "Oil change"
        assert record.mileage == 1000
        assert record.cost == 45.5

    def test_create_record_returns_new_record(self, store):
        store.create(fields(date="2024-03-01"))
        record = store.create_record(fields(date="2024-01-15", cost="12"))
        assert record.id == "id2"
        assert record.cost == 12.0
        assert record in store.list()

    def test_blank_mileage_omitted_from_file(self, store):
        store.create(fields(mileage=""))
        entry = json.loads(store.filename.read_text())["entries"][0]
        assert "mileage" not in entry
        assert store.list()[0].mileage is None

    def test_storage_keeps_insertion_order(self, store):
        store.create(fields(date="2024-03-01"))
        store.create(fields(date="2024-01-15"))
        ids = [e["id"] for e in json.loads(store.filename.read_text())["entries"]]
        assert ids == ["id1", "id2"]

    @pytest.mark.parametrize(
        "bad, error",
        [
            ({"date": "2024/01/15"}, InvalidDate),
            ({"maintenance": "   "}, InvalidMaintenance),
            ({"mileage": "-10"}, InvalidMileage),
            ({"cost": "free"}, InvalidCost),
        ],
    )
    def test_invalid_fields_leave_store_unchanged(self, store, bad, error):
        store.create(fields())
        before = store.filename.read_bytes()
        with pytest.raises(error):
            store.create(fields(**bad))
        assert store.filename.read_bytes() == before

    def test_round_trip(self, store):
        """A created record lists back with canonical field values."""
        store.create(fields(date="2024-02-30", maintenance="Valve check", mileage="15,000", cost="$350"))
        [record] = store.list()
        assert record.to_dict() == {
            "id": "id1",
            "date": "2024-02-30",
            "maintenance": "Valve check",
            "mileage": 15000,
            "cost": 350.0,
        }


class TestUpdate:
    """Tests for RecordStore.update."""

    def test_replaces_fields_and_keeps_id(self, store):
        store.create(fields(mileage="1000"))
        document = store.update("id1", fields(date="2024-02-01", maintenance="Oil + filter", mileage="1200", cost="60"))
        [record] = document.entries
        assert record.to_dict() == {
            "id": "id1",
            "date": "2024-02-01",
            "maintenance": "Oil + filter",
            "mileage": 1200,
            "cost": 60.0,
        }

    def test_blank_mileage_removes_reading(self, store):
        """Update is a full replace: a blank mileage clears the old one."""
        store.create(fields(mileage="1000"))
        store.update("id1", fields(mileage=None))
        assert store.list()[0].mileage is None
        entry = json.loads(store.filename.read_text())["entries"][0]
        assert "mileage" not in entry

    def test_resorts_after_date_change(self, store):
        store.create(fields(date="2024-01-01"))
        store.create(fields(date="2024-02-01"))
        document = store.update("id1", fields(date="2024-03-01"))
        assert [r.id for r in document.entries] == ["id2", "id1"]

    def test_unknown_id_raises_not_found(self, store):
        store.create(fields())
        before = store.filename.read_bytes()
        with pytest.raises(NotFound) as exc:
            store.update("missing", fields())
        assert exc.value.record_id == "missing"
        assert store.filename.read_bytes() == before

    def test_validation_checked_before_lookup(self, store):
        with pytest.raises(InvalidDate):
            store.update("missing", fields(date=""))

    def test_invalid_fields_leave_store_unchanged(self, store):
        store.create(fields())
        before = store.filename.read_bytes()
        with pytest.raises(InvalidCost):
            store.update("id1", fields(cost=None))
        assert store.filename.read_bytes() == before


class TestDelete:
    """Tests for RecordStore.delete."""

    def test_removes_record(self, store):
        store.create(fields())
        store.create(fields(date="2024-02-01"))
        document = store.delete("id1")
        assert [r.id for r in document.entries] == ["id2"]
        assert [r.id for r in store.list()] == ["id2"]

    def test_unknown_id_raises_not_found(self, store):
        store.create(fields())
        with pytest.raises(NotFound):
            store.delete("missing")
        assert len(store.list()) == 1


class TestNotes:
    """Tests for RecordStore.set_notes."""

    def test_saves_notes(self, store):
        store.create(fields())
        store.set_notes("Frame sliders\nTail tidy")
        document = store.load()
        assert document.notes == "Frame sliders\nTail tidy"
        assert len(document.entries) == 1

    def test_empty_notes_allowed(self, store):
        store.set_notes("x")
        store.set_notes("")
        assert store.load().notes == ""

    def test_non_string_rejected(self, store):
        store.set_notes("keep")
        with pytest.raises(InvalidNotes):
            store.set_notes(["not", "text"])
        assert store.load().notes == "keep"


class TestDocumentAndStats:
    """Tests for RecordStore.document and RecordStore.stats."""

    def test_document_is_sorted(self, store):
        store.create(fields(date="2024-03-01"))
        store.create(fields(date="2024-01-01"))
        store.set_notes("n")
        document = store.document()
        assert [r.id for r in document.entries] == ["id2", "id1"]
        assert document.notes == "n"

    def test_stats(self, store):
        store.create(fields(mileage="1000", cost="45"))
        store.create(fields(date="2024-04-01", mileage="4000", cost="55"))
        assert store.stats() == {
            "totalSpent": 100.0,
            "entryCount": 2,
            "averageOilChangeInterval": 3000,
        }


class TestLastWriteWins:
    """Overlapping read-modify-write cycles are not merged."""

    def test_stale_save_discards_concurrent_change(self, store):
        stale = store.load()
        store.create(fields())
        stale.notes = "written from a stale copy"
        store.save(stale)
        document = store.load()
        assert document.entries == []
        assert document.notes == "written from a stale copy"
