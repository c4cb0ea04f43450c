"""
Sighting Endpoints
==================
CRUD over the JSON sightings file, plus filtering, dashboard counters,
export and manual location validation.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from parkwatch.config import get_settings
from parkwatch.models.store import JsonStore, get_sighting_store, get_user_store
from parkwatch.schemas.wildlife import (
    Coordinates,
    LocationValidationRequest,
    LocationValidationResponse,
    Sighting,
    SightingCreate,
    SightingStats,
    User,
)
from parkwatch.services.heatmap import HeatmapCache, get_heatmap_cache
from parkwatch.services.sightings import (
    SPECIES_BY_TYPE,
    LocationOutOfBounds,
    SightingFilter,
    SightingService,
    export_filename,
)
from parkwatch.spatial.bounds import parse_manual_coordinates

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/sightings", tags=["Sightings"])
settings = get_settings()


def _service(store: JsonStore[Sighting]) -> SightingService:
    return SightingService(store, settings.bounds, settings.park_name)


# ── List / filter ─────────────────────────────────────────────────
@router.get("/", response_model=list[Sighting])
def list_sightings(
    search: str = "",
    type: str = "all",
    threat: str = "all",
    store: JsonStore[Sighting] = Depends(get_sighting_store),
    users: JsonStore[User] = Depends(get_user_store),
):
    """Newest-first sightings, optionally filtered."""
    criteria = SightingFilter(search=search, type=type, threat=threat)
    reporters = users.read_all() if search else []
    return _service(store).filter(criteria, reporters)


# ── Create ────────────────────────────────────────────────────────
@router.post("/", response_model=Sighting, status_code=201)
def create_sighting(
    payload: SightingCreate,
    store: JsonStore[Sighting] = Depends(get_sighting_store),
    heatmap: HeatmapCache = Depends(get_heatmap_cache),
):
    """
    Report a sighting.

    The server assigns ``id`` and ``timestamp``.  Coordinates are rounded
    to 6 dp; reports outside the park are rejected with a 422 carrying a
    message suitable for the form.
    """
    svc = _service(store)
    try:
        sighting = svc.create(payload)
    except LocationOutOfBounds as e:
        raise HTTPException(422, str(e))
    heatmap.refresh(svc.list_all())
    return sighting


# ── Update ────────────────────────────────────────────────────────
@router.put("/", response_model=Sighting)
def update_sighting(
    sighting: Sighting,
    store: JsonStore[Sighting] = Depends(get_sighting_store),
    heatmap: HeatmapCache = Depends(get_heatmap_cache),
):
    svc = _service(store)
    try:
        updated = svc.update(sighting)
    except LocationOutOfBounds as e:
        raise HTTPException(422, str(e))
    if updated is None:
        raise HTTPException(404, "Sighting not found")
    heatmap.refresh(svc.list_all())
    return updated


# ── Delete ────────────────────────────────────────────────────────
@router.delete("/")
def delete_sighting(
    id: str | None = None,
    store: JsonStore[Sighting] = Depends(get_sighting_store),
    heatmap: HeatmapCache = Depends(get_heatmap_cache),
):
    if not id:
        raise HTTPException(400, "Sighting ID required")
    svc = _service(store)
    if not svc.delete(id):
        raise HTTPException(404, "Sighting not found")
    heatmap.refresh(svc.list_all())
    return {"message": "Sighting deleted successfully"}


# ── Dashboard ─────────────────────────────────────────────────────
@router.get("/stats", response_model=SightingStats)
def sighting_stats(store: JsonStore[Sighting] = Depends(get_sighting_store)):
    """Totals, high-threat reports in the last 24 h, rare species, reporters."""
    return _service(store).stats()


@router.get("/active-threats", response_model=list[Sighting])
def active_threats(
    limit: int = 5,
    store: JsonStore[Sighting] = Depends(get_sighting_store),
):
    return _service(store).active_threats(limit=limit)


@router.get("/species")
async def species_catalogue() -> dict[str, list[str]]:
    return SPECIES_BY_TYPE


# ── Export ────────────────────────────────────────────────────────
@router.get("/export")
def export_sightings(
    search: str = "",
    type: str = "all",
    threat: str = "all",
    store: JsonStore[Sighting] = Depends(get_sighting_store),
    users: JsonStore[User] = Depends(get_user_store),
):
    """The filtered list as a downloadable JSON file."""
    criteria = SightingFilter(search=search, type=type, threat=threat)
    reporters = users.read_all() if search else []
    sightings = _service(store).filter(criteria, reporters)
    body = json.dumps(
        [s.model_dump(mode="json", by_alias=True) for s in sightings],
        indent=2,
        ensure_ascii=False,
    )
    return Response(
        content=body,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


# ── Manual location entry ─────────────────────────────────────────
@router.post("/validate-location", response_model=LocationValidationResponse)
async def validate_location(req: LocationValidationRequest):
    """
    Check latitude / longitude typed by the user.

    Always 200: problems come back in ``error`` so the form can show
    them without submitting.
    """
    check = parse_manual_coordinates(
        req.lat, req.lng, settings.bounds, settings.park_name
    )
    coords = (
        Coordinates(lat=check.coordinates.lat, lng=check.coordinates.lng)
        if check.coordinates is not None
        else None
    )
    return LocationValidationResponse(valid=check.ok, coordinates=coords, error=check.error)


# ── Single sighting ───────────────────────────────────────────────
@router.get("/{sighting_id}", response_model=Sighting)
def get_sighting(
    sighting_id: str,
    store: JsonStore[Sighting] = Depends(get_sighting_store),
):
    sighting = _service(store).get(sighting_id)
    if sighting is None:
        raise HTTPException(404, "Sighting not found")
    return sighting
