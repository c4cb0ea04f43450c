"""
Tests for parkwatch.models.store — JsonStore and seed data.
"""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from parkwatch.models.store import JsonStore, default_sightings, default_users
from parkwatch.schemas.wildlife import Sighting, User
from parkwatch.spatial.bounds import YELLOWSTONE_BOUNDS, GeoPoint
from tests.conftest import NOW, make_sighting


class TestJsonStore:

    def test_missing_file_is_seeded(self, tmp_path):
        path = tmp_path / "nested" / "sightings.json"
        store = JsonStore(path, Sighting, lambda: default_sightings(NOW))
        records = store.read_all()
        assert [s.id for s in records] == ["1", "2", "3", "4", "5"]
        assert path.exists()

    def test_corrupt_file_is_reseeded(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonStore(path, User, default_users)
        assert len(store.read_all()) == 5
        assert json.loads(path.read_text(encoding="utf-8"))[0]["id"] == "user1"

    def test_empty_file_is_reseeded(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text("", encoding="utf-8")
        store = JsonStore(path, User, default_users)
        assert [u.id for u in store.read_all()][:1] == ["user1"]

    def test_invalid_record_keeps_file(self, tmp_path):
        path = tmp_path / "sightings.json"
        good = make_sighting(id="user-report-42").model_dump(mode="json", by_alias=True)
        bad = dict(good, id="user-report-43", threatLevel="extreme")
        original = json.dumps([good, bad])
        path.write_text(original, encoding="utf-8")

        store = JsonStore(path, Sighting, lambda: default_sightings(NOW))
        with pytest.raises(ValidationError):
            store.read_all()
        assert path.read_text(encoding="utf-8") == original

    def test_unreadable_path_propagates(self, tmp_path):
        # A directory where the file should be is not "missing".
        path = tmp_path / "sightings.json"
        path.mkdir()
        store = JsonStore(path, Sighting, lambda: default_sightings(NOW))
        with pytest.raises(OSError):
            store.read_all()

    def test_no_seed_gives_empty_list(self, tmp_path):
        store = JsonStore(tmp_path / "empty.json", User)
        assert store.read_all() == []

    def test_written_with_camel_case_keys(self, sighting_store):
        sighting_store.write_all([make_sighting()])
        raw = json.loads(sighting_store.path.read_text(encoding="utf-8"))
        assert raw[0]["reporterId"] == "user1"
        assert raw[0]["threatLevel"] == "high"
        assert raw[0]["coordinates"] == {"lat": 44.6, "lng": -110.5}
        assert "reporter_id" not in raw[0]

    def test_write_then_read(self, sighting_store):
        records = [make_sighting(id="a"), make_sighting(id="b", type="wolf")]
        sighting_store.write_all(records)
        assert sighting_store.read_all() == records

    def test_write_error_propagates(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        # Parent "directory" is a regular file.
        store = JsonStore(blocker / "data.json", User)
        with pytest.raises(OSError):
            store.write_all([])


class TestSeedData:

    def test_sightings_inside_park(self):
        for s in default_sightings(NOW):
            assert YELLOWSTONE_BOUNDS.contains_point(GeoPoint(s.coordinates.lat, s.coordinates.lng))

    def test_sightings_newest_first(self):
        stamps = [s.timestamp for s in default_sightings(NOW)]
        assert stamps == sorted(stamps, reverse=True)
        assert stamps[0] == NOW

    def test_reporters_exist(self):
        user_ids = {u.id for u in default_users()}
        assert {s.reporter_id for s in default_sightings(NOW)} <= user_ids
