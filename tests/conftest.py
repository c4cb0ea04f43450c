"""
Shared fixtures for the ParkWatch test suite.

This conftest provides:
- JSON stores backed by a temporary directory
- A test app (httpx.AsyncClient) with store / cache overrides
- Reusable sample data factories
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from parkwatch.models.store import (
    JsonStore,
    default_sightings,
    default_users,
    get_sighting_store,
    get_user_store,
)
from parkwatch.schemas.wildlife import Coordinates, Sighting, User
from parkwatch.services.heatmap import HeatmapCache, get_heatmap_cache
from parkwatch.spatial.binning import SpatialBinner

# ---------------------------------------------------------------------------
# Sample data factories
# ---------------------------------------------------------------------------
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_sighting(
    *,
    id: str = "100",
    type: str = "bear",
    species: str = "Grizzly Bear",
    lat: float = 44.6,
    lng: float = -110.5,
    reporter_id: str = "user1",
    description: str = "Bear near the trail",
    threat_level: str = "high",
    verified: bool = True,
    timestamp: datetime | None = None,
) -> Sighting:
    return Sighting(
        id=id,
        type=type,
        species=species,
        coordinates=Coordinates(lat=lat, lng=lng),
        timestamp=timestamp or NOW,
        reporter_id=reporter_id,
        description=description,
        threat_level=threat_level,
        verified=verified,
        images=[],
    )


def make_user(*, id: str = "user1", name: str = "Sarah Johnson") -> User:
    return User(
        id=id,
        name=name,
        username=name.split()[0].lower(),
        join_date="2024-01-15",
    )


# ---------------------------------------------------------------------------
# Stores on a temp directory
# ---------------------------------------------------------------------------
@pytest.fixture()
def sighting_store(tmp_path) -> JsonStore[Sighting]:
    return JsonStore(tmp_path / "sightings.json", Sighting, lambda: default_sightings(NOW))


@pytest.fixture()
def user_store(tmp_path) -> JsonStore[User]:
    return JsonStore(tmp_path / "users.json", User, default_users)


@pytest.fixture()
def heatmap_cache(sighting_store) -> HeatmapCache:
    return HeatmapCache(sighting_store, SpatialBinner(0.02))


@pytest.fixture()
def make_client(sighting_store, user_store, heatmap_cache):
    """Build an AsyncClient for a FastAPI app with a single router mounted."""

    def _make(router) -> AsyncClient:
        app = FastAPI()
        app.include_router(router, prefix="/api")
        app.dependency_overrides[get_sighting_store] = lambda: sighting_store
        app.dependency_overrides[get_user_store] = lambda: user_store
        app.dependency_overrides[get_heatmap_cache] = lambda: heatmap_cache
        transport = ASGITransport(app=app)
        return AsyncClient(transport=transport, base_url="http://testserver")

    return _make

