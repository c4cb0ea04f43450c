"""
Tests for parkwatch.routers.sightings — CRUD, filters, stats, export.
"""
from __future__ import annotations

import inspect
import json
from datetime import datetime, timezone

import pytest

from parkwatch.routers import sightings as sightings_router
from parkwatch.routers.sightings import router
from tests.conftest import make_sighting

NEW_SIGHTING = {
    "type": "elk",
    "species": "Rocky Mountain Elk",
    "coordinates": {"lat": 44.65, "lng": -110.48},
    "reporterId": "user2",
    "description": "Bull elk in Hayden Valley",
    "threatLevel": "medium",
}


# ═══════════════════════════════════════════════════════════════════
# List / get
# ═══════════════════════════════════════════════════════════════════
class TestListSightings:

    @pytest.mark.asyncio
    async def test_list_all(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/sightings/")
        assert resp.status_code == 200
        body = resp.json()
        assert [s["id"] for s in body] == ["1", "2", "3", "4", "5"]
        assert body[0]["reporterId"] == "user1"
        assert body[0]["threatLevel"] == "high"

    @pytest.mark.asyncio
    async def test_filter_by_type_and_threat(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/sightings/", params={"type": "bison", "threat": "low"})
        assert [s["id"] for s in resp.json()] == ["4", "5"]

    @pytest.mark.asyncio
    async def test_search_by_reporter_name(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/sightings/", params={"search": "mike"})
        assert [s["id"] for s in resp.json()] == ["2", "5"]

    @pytest.mark.asyncio
    async def test_get_one(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/sightings/3")
        assert resp.status_code == 200
        assert resp.json()["species"] == "Canada Lynx"

    @pytest.mark.asyncio
    async def test_get_missing(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/sightings/nope")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Sighting not found"


# ═══════════════════════════════════════════════════════════════════
# Create / update / delete
# ═══════════════════════════════════════════════════════════════════
class TestMutations:

    @pytest.mark.asyncio
    async def test_create(self, make_client, sighting_store, heatmap_cache):
        async with make_client(router) as client:
            resp = await client.post("/api/sightings/", json=NEW_SIGHTING)
        assert resp.status_code == 201
        body = resp.json()
        assert body["id"].isdigit()
        assert body["verified"] is False
        assert body["coordinates"] == {"lat": 44.65, "lng": -110.48}
        assert sighting_store.read_all()[0].id == body["id"]
        assert heatmap_cache.refreshed_at is not None
        assert sum(b.intensity for b in heatmap_cache.bins) == 6

    @pytest.mark.asyncio
    async def test_create_out_of_bounds(self, make_client, sighting_store):
        payload = dict(NEW_SIGHTING, coordinates={"lat": 45.101, "lng": -110.5})
        async with make_client(router) as client:
            resp = await client.post("/api/sightings/", json=payload)
        assert resp.status_code == 422
        assert resp.json()["detail"] == "Location must be within Yellowstone National Park boundaries"
        assert len(sighting_store.read_all()) == 5

    @pytest.mark.asyncio
    async def test_create_missing_field(self, make_client):
        payload = {k: v for k, v in NEW_SIGHTING.items() if k != "species"}
        async with make_client(router) as client:
            resp = await client.post("/api/sightings/", json=payload)
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_create_bad_threat_level(self, make_client):
        payload = dict(NEW_SIGHTING, threatLevel="extreme")
        async with make_client(router) as client:
            resp = await client.post("/api/sightings/", json=payload)
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_update(self, make_client, sighting_store):
        existing = sighting_store.read_all()[1]
        body = existing.model_dump(mode="json", by_alias=True)
        body["description"] = "Pack of 4 wolves"
        async with make_client(router) as client:
            resp = await client.put("/api/sightings/", json=body)
        assert resp.status_code == 200
        assert resp.json()["description"] == "Pack of 4 wolves"
        assert sighting_store.read_all()[1].description == "Pack of 4 wolves"

    @pytest.mark.asyncio
    async def test_update_missing(self, make_client):
        body = make_sighting(id="nope").model_dump(mode="json", by_alias=True)
        async with make_client(router) as client:
            resp = await client.put("/api/sightings/", json=body)
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_update_out_of_bounds(self, make_client):
        body = make_sighting(id="1", lng=-109.89).model_dump(mode="json", by_alias=True)
        async with make_client(router) as client:
            resp = await client.put("/api/sightings/", json=body)
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_delete(self, make_client, sighting_store):
        async with make_client(router) as client:
            resp = await client.delete("/api/sightings/", params={"id": "2"})
        assert resp.status_code == 200
        assert resp.json() == {"message": "Sighting deleted successfully"}
        assert [s.id for s in sighting_store.read_all()] == ["1", "3", "4", "5"]

    @pytest.mark.asyncio
    async def test_delete_requires_id(self, make_client):
        async with make_client(router) as client:
            resp = await client.delete("/api/sightings/")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Sighting ID required"

    @pytest.mark.asyncio
    async def test_delete_missing(self, make_client):
        async with make_client(router) as client:
            resp = await client.delete("/api/sightings/", params={"id": "nope"})
        assert resp.status_code == 404


# ═══════════════════════════════════════════════════════════════════
# Dashboard / catalogue / export
# ═══════════════════════════════════════════════════════════════════
class TestDashboard:

    @pytest.mark.asyncio
    async def test_stats(self, make_client, sighting_store):
        recent = make_sighting(id="r", timestamp=datetime.now(timezone.utc))
        sighting_store.write_all([recent] + sighting_store.read_all())
        async with make_client(router) as client:
            resp = await client.get("/api/sightings/stats")
        assert resp.status_code == 200
        assert resp.json() == {
            "totalSightings": 6,
            "activeThreat": 1,
            "rareSpecies": 1,
            "activeUsers": 3,
        }

    @pytest.mark.asyncio
    async def test_active_threats(self, make_client, sighting_store):
        now = datetime.now(timezone.utc)
        sighting_store.write_all([
            make_sighting(id="a", timestamp=now),
            make_sighting(id="b", timestamp=now, threat_level="low"),
            make_sighting(id="c", timestamp=now),
        ])
        async with make_client(router) as client:
            resp = await client.get("/api/sightings/active-threats", params={"limit": 1})
        assert [s["id"] for s in resp.json()] == ["a"]

    @pytest.mark.asyncio
    async def test_species(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/sightings/species")
        assert resp.json()["bear"] == ["Grizzly Bear", "Black Bear"]

    @pytest.mark.asyncio
    async def test_export(self, make_client):
        async with make_client(router) as client:
            resp = await client.get("/api/sightings/export", params={"type": "bison"})
        assert resp.status_code == 200
        disposition = resp.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="yellowstone-sightings-')
        assert disposition.endswith('.json"')
        exported = json.loads(resp.text)
        assert [s["id"] for s in exported] == ["4", "5"]
        assert "reporterId" in exported[0]


# ═══════════════════════════════════════════════════════════════════
# Manual location entry
# ═══════════════════════════════════════════════════════════════════
class TestValidateLocation:

    @pytest.mark.asyncio
    async def test_valid(self, make_client):
        async with make_client(router) as client:
            resp = await client.post(
                "/api/sightings/validate-location", json={"lat": "44.6", "lng": "-110.5"}
            )
        assert resp.json() == {
            "valid": True,
            "coordinates": {"lat": 44.6, "lng": -110.5},
            "error": None,
        }

    @pytest.mark.asyncio
    async def test_out_of_bounds(self, make_client):
        async with make_client(router) as client:
            resp = await client.post(
                "/api/sightings/validate-location", json={"lat": "45.101", "lng": "-110.5"}
            )
        body = resp.json()
        assert resp.status_code == 200
        assert body["valid"] is False
        assert body["error"] == "Location must be within Yellowstone National Park boundaries"

    @pytest.mark.asyncio
    async def test_not_a_number(self, make_client):
        async with make_client(router) as client:
            resp = await client.post(
                "/api/sightings/validate-location", json={"lat": "north", "lng": "-110.5"}
            )
        body = resp.json()
        assert body["valid"] is False
        assert body["coordinates"] is None
        assert body["error"] == "Latitude and longitude must be numbers"


# ═══════════════════════════════════════════════════════════════════
# Handlers doing file I/O run in the threadpool
# ═══════════════════════════════════════════════════════════════════
class TestSyncHandlers:

    @pytest.mark.parametrize("name", [
        "list_sightings", "create_sighting", "update_sighting", "delete_sighting",
        "sighting_stats", "active_threats", "export_sightings", "get_sighting",
    ])
    def test_store_handlers_are_plain_functions(self, name):
        handler = getattr(sightings_router, name)
        assert not inspect.iscoroutinefunction(handler)
