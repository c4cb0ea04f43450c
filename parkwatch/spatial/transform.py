"""
Viewport Transformation Engine
==============================
Bridges the gap between two coordinate spaces:

1. **Geographic** — latitude / longitude in degrees, limited to a
   ``GeoBounds`` rectangle.
2. **Screen**     — pixels on a fixed logical canvas (800 × 600 by default).

The mapping is a flat linear interpolation, not a map projection.  The
forward transform is composed in a fixed order:

    base  = lerp(p, bounds) → canvas px      (north is pixel-up)
    scaled = (base − c) × zoom + c            (c = canvas centre)
    screen = scaled + pan

and ``unproject`` undoes the three steps in reverse.  Changing the order
moves the anchor point of zoom, so it must not be reordered.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from parkwatch.spatial.bounds import YELLOWSTONE_BOUNDS, GeoBounds, GeoPoint, round6

DEFAULT_ZOOM_RANGE: tuple[float, float] = (0.5, 4.0)
DEFAULT_VISIBILITY_MARGIN = 50.0
ZOOM_STEP = 1.5


# ── Screen-space value types ─────────────────────────────────────
@dataclass(frozen=True, slots=True)
class PixelPoint:
    """A point in screen pixels relative to the logical canvas."""

    x: float
    y: float

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True, slots=True)
class CanvasSize:
    width: float = 800.0
    height: float = 600.0

    @property
    def center(self) -> PixelPoint:
        return PixelPoint(self.width / 2, self.height / 2)


# ── Viewport state ───────────────────────────────────────────────
@dataclass(slots=True)
class ViewportState:
    """
    Pan / zoom state.  Owned by whoever hosts the map; the transform
    mutates it only through ``pan``, ``zoom_by`` and ``reset``.
    """

    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0


# ── Viewport Transformer ─────────────────────────────────────────
class ViewportTransform:
    """
    Converts between geographic coordinates and screen pixels under the
    current pan / zoom.

    Parameters
    ----------
    bounds : GeoBounds
        Geographic rectangle mapped onto the whole canvas at zoom 1.
    canvas : CanvasSize
        Logical canvas size in pixels.
    state : ViewportState, optional
        Externally owned state; a fresh one is created when omitted.
    zoom_range : tuple[float, float]
        Inclusive ``(min, max)`` zoom clamp.
    visibility_margin : float
        Extra pixels around the canvas still considered visible.
    """

    def __init__(
        self,
        bounds: GeoBounds = YELLOWSTONE_BOUNDS,
        canvas: CanvasSize | None = None,
        state: ViewportState | None = None,
        zoom_range: tuple[float, float] = DEFAULT_ZOOM_RANGE,
        visibility_margin: float = DEFAULT_VISIBILITY_MARGIN,
    ) -> None:
        zoom_min, zoom_max = zoom_range
        if not 0 < zoom_min <= zoom_max:
            raise ValueError(f"Invalid zoom range {zoom_range!r}")
        self.bounds = bounds
        self.canvas = canvas or CanvasSize()
        self.state = state if state is not None else ViewportState()
        self.zoom_min = zoom_min
        self.zoom_max = zoom_max
        self.visibility_margin = visibility_margin

    # ── Accessors ─────────────────────────────────────────────

    @property
    def zoom(self) -> float:
        return self.state.zoom

    @property
    def pan_offset(self) -> PixelPoint:
        return PixelPoint(self.state.pan_x, self.state.pan_y)

    # ── Forward / inverse mapping ─────────────────────────────

    def project(self, point: GeoPoint) -> PixelPoint:
        """Geographic point → screen pixel."""
        b = self.bounds
        w, h = self.canvas.width, self.canvas.height
        cx, cy = w / 2, h / 2

        base_x = (point.lng - b.west) / b.lng_span * w
        base_y = (b.north - point.lat) / b.lat_span * h

        zoomed_x = (base_x - cx) * self.state.zoom + cx
        zoomed_y = (base_y - cy) * self.state.zoom + cy

        return PixelPoint(zoomed_x + self.state.pan_x, zoomed_y + self.state.pan_y)

    def unproject(self, pixel: PixelPoint) -> GeoPoint:
        """Screen pixel → geographic point, rounded to 6 dp."""
        if not pixel.is_finite():
            raise ValueError(f"Non-finite pixel coordinate {pixel!r}")
        zoom = self.state.zoom
        assert zoom > 0, f"zoom must be positive, got {zoom}"

        b = self.bounds
        w, h = self.canvas.width, self.canvas.height
        cx, cy = w / 2, h / 2

        adjusted_x = pixel.x - self.state.pan_x
        adjusted_y = pixel.y - self.state.pan_y

        base_x = (adjusted_x - cx) / zoom + cx
        base_y = (adjusted_y - cy) / zoom + cy

        lat = b.north - (base_y / h) * b.lat_span
        lng = b.west + (base_x / w) * b.lng_span
        return GeoPoint(round6(lat), round6(lng))

    # ── State mutation ────────────────────────────────────────

    def pan(self, dx: float, dy: float) -> None:
        """Translate by a pixel delta.  Panning is not clamped."""
        if not (math.isfinite(dx) and math.isfinite(dy)):
            raise ValueError(f"Non-finite pan delta ({dx}, {dy})")
        self.state.pan_x += dx
        self.state.pan_y += dy

    def zoom_by(self, factor: float) -> float:
        """Multiply zoom by ``factor``, clamped to the zoom range."""
        if not math.isfinite(factor) or factor <= 0:
            raise ValueError(f"Zoom factor must be positive and finite, got {factor}")
        self.state.zoom = min(max(self.state.zoom * factor, self.zoom_min), self.zoom_max)
        return self.state.zoom

    def zoom_in(self) -> float:
        return self.zoom_by(ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.zoom_by(1 / ZOOM_STEP)

    def reset(self) -> None:
        self.state.zoom = 1.0
        self.state.pan_x = 0.0
        self.state.pan_y = 0.0

    # ── Culling ───────────────────────────────────────────────

    def is_visible(self, pixel: PixelPoint) -> bool:
        """Is ``pixel`` on the canvas, allowing the visibility margin?"""
        m = self.visibility_margin
        return (
            -m <= pixel.x <= self.canvas.width + m
            and -m <= pixel.y <= self.canvas.height + m
        )
