"""
Map Engine Endpoints
====================
Stateless access to the viewport engine.  The client owns its
``ViewportIn`` (zoom + pan) and sends it with every request; the server
projects, picks, zooms and renders layers against the configured park
bounds and canvas.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from parkwatch.config import get_settings
from parkwatch.models.store import JsonStore, get_sighting_store, get_user_store
from parkwatch.schemas.wildlife import (
    Coordinates,
    DrawableOut,
    HeatBinOut,
    HeatmapResponse,
    MapConfigResponse,
    PickResponse,
    ProjectRequest,
    ProjectResponse,
    RenderRequest,
    RenderResponse,
    Sighting,
    UnprojectRequest,
    User,
    ViewportIn,
    ZoomRequest,
)
from parkwatch.services.heatmap import HeatmapCache, get_heatmap_cache
from parkwatch.services.sightings import SightingFilter, SightingService, to_marker
from parkwatch.services.viewport import build_transform, pixel_out, viewport_out
from parkwatch.spatial.binning import SpatialBinner, heat_radius
from parkwatch.spatial.bounds import GeoPoint
from parkwatch.spatial.interaction import InteractionController
from parkwatch.spatial.layers import (
    LayerVisibility,
    RenderContext,
    RenderLayerSet,
    preset,
)
from parkwatch.spatial.transform import PixelPoint

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/map", tags=["Map"])
settings = get_settings()
layer_set = RenderLayerSet()


# ── Configuration ─────────────────────────────────────────────────
@router.get("/config", response_model=MapConfigResponse)
async def map_config():
    b = settings.bounds
    return MapConfigResponse(
        park_name=settings.park_name,
        bounds={"north": b.north, "south": b.south, "east": b.east, "west": b.west},
        center=Coordinates(lat=b.center.lat, lng=b.center.lng),
        canvas={"width": settings.canvas.width, "height": settings.canvas.height},
        grid_size=settings.grid_size,
        zoom_range=settings.zoom_range,
        zoom_step=settings.zoom_step,
        visibility_margin=settings.visibility_margin,
    )


# ── Coordinate conversion ─────────────────────────────────────────
@router.post("/project", response_model=ProjectResponse)
async def project(req: ProjectRequest):
    """Geographic points → canvas pixels under the given viewport."""
    transform = build_transform(req.viewport, settings)
    return ProjectResponse(
        pixels=[
            pixel_out(transform, transform.project(GeoPoint(p.lat, p.lng)))
            for p in req.points
        ]
    )


@router.post("/unproject", response_model=Coordinates)
async def unproject(req: UnprojectRequest):
    """Canvas pixel → geographic point (6 dp), with no bounds check."""
    transform = build_transform(req.viewport, settings)
    point = transform.unproject(PixelPoint(req.pixel.x, req.pixel.y))
    return Coordinates(lat=point.lat, lng=point.lng)


@router.post("/pick", response_model=PickResponse)
async def pick(req: UnprojectRequest):
    """
    Resolve a location-selection click.

    Clicks outside the park bounds are dropped: the response carries
    ``coordinates: null`` rather than an error.
    """
    controller = InteractionController(build_transform(req.viewport, settings))
    controller.set_selecting(True)
    point = controller.click(PixelPoint(req.pixel.x, req.pixel.y))
    if point is None:
        return PickResponse()
    return PickResponse(coordinates=Coordinates(lat=point.lat, lng=point.lng))


@router.post("/zoom", response_model=ViewportIn)
async def zoom(req: ZoomRequest):
    transform = build_transform(req.viewport, settings)
    if req.action == "in":
        transform.zoom_by(settings.zoom_step)
    elif req.action == "out":
        transform.zoom_by(1 / settings.zoom_step)
    else:
        transform.reset()
    return viewport_out(transform)


# ── Heatmap ───────────────────────────────────────────────────────
@router.get("/heatmap", response_model=HeatmapResponse)
def heatmap(cache: HeatmapCache = Depends(get_heatmap_cache)):
    """Current sighting density bins (floor-corner lat/lng)."""
    bins = cache.bins if cache.refreshed_at is not None else cache.refresh()
    return HeatmapResponse(
        grid_size=cache.binner.grid_size,
        bins=[
            HeatBinOut(
                lat=b.lat, lng=b.lng, intensity=b.intensity,
                radius=heat_radius(b.intensity),
            )
            for b in bins
        ],
    )


# ── Layer rendering ───────────────────────────────────────────────
def _visibility(req: RenderRequest) -> LayerVisibility:
    try:
        visibility = preset(req.preset) if req.preset else LayerVisibility()
    except KeyError as e:
        raise HTTPException(400, str(e.args[0]))
    for name, enabled in req.layers.items():
        if name not in layer_set.names:
            raise HTTPException(400, f"Unknown layer {name!r}")
        visibility.set(name, enabled)
    return visibility


@router.post("/render", response_model=RenderResponse)
def render(
    req: RenderRequest,
    store: JsonStore[Sighting] = Depends(get_sighting_store),
    users: JsonStore[User] = Depends(get_user_store),
    cache: HeatmapCache = Depends(get_heatmap_cache),
):
    """
    Screen-space drawables for every enabled layer, bottom-to-top.

    Markers and heat bins follow the same filters as the sighting list.
    """
    visibility = _visibility(req)
    transform = build_transform(req.viewport, settings)

    criteria = SightingFilter(search=req.search, type=req.type, threat=req.threat)
    svc = SightingService(store, settings.bounds, settings.park_name)
    sightings = svc.filter(criteria, users.read_all() if req.search else [])

    if criteria == SightingFilter() and cache.refreshed_at is not None:
        bins = cache.bins
    else:
        binner = SpatialBinner(settings.grid_size)
        bins = binner.compute_bins(
            GeoPoint(s.coordinates.lat, s.coordinates.lng) for s in sightings
        )

    interaction = InteractionController(transform)
    interaction.hover(req.hovered_id)

    ctx = RenderContext(
        transform=transform,
        markers=[to_marker(s) for s in sightings],
        heat_bins=bins,
        selected_id=req.selected_id,
        hovered_id=interaction.state.hovered_id,
        heat_intensity=req.heat_intensity,
    )
    drawables = layer_set.render(ctx, visibility)

    return RenderResponse(
        viewport=viewport_out(transform),
        layers={name: visibility.enabled(name) for name in layer_set.names},
        drawables=[
            DrawableOut(
                layer=d.layer,
                kind=d.kind,
                points=[pixel_out(transform, p) for p in d.points],
                radius=d.radius,
                label=d.label,
                ref_id=d.ref_id,
                style=d.style,
                anchor=pixel_out(transform, d.anchor) if d.anchor is not None else None,
                selected=d.selected,
                hovered=d.hovered,
                intensity=d.intensity,
                opacity=d.opacity,
            )
            for d in drawables
        ],
    )
