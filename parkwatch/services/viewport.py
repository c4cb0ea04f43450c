"""
Builds map-engine objects from configuration and client-held state.

The HTTP API is stateless: every map request carries the client's
``ViewportIn`` and gets a fresh ``ViewportTransform`` wired to the
configured bounds, canvas, zoom range and visibility margin.
"""

from __future__ import annotations

from parkwatch.config import Settings
from parkwatch.schemas.wildlife import PixelOut, ViewportIn
from parkwatch.spatial.transform import PixelPoint, ViewportState, ViewportTransform


def build_transform(viewport: ViewportIn, settings: Settings) -> ViewportTransform:
    transform = ViewportTransform(
        bounds=settings.bounds,
        canvas=settings.canvas,
        state=ViewportState(),
        zoom_range=settings.zoom_range,
        visibility_margin=settings.visibility_margin,
    )
    # Route client values through the transform so zoom is clamped.
    transform.zoom_by(viewport.zoom)
    transform.pan(viewport.pan_x, viewport.pan_y)
    return transform


def viewport_out(transform: ViewportTransform) -> ViewportIn:
    state = transform.state
    return ViewportIn(zoom=state.zoom, pan_x=state.pan_x, pan_y=state.pan_y)


def pixel_out(transform: ViewportTransform, pixel: PixelPoint) -> PixelOut:
    return PixelOut(x=pixel.x, y=pixel.y, visible=transform.is_visible(pixel))
