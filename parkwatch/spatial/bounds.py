"""
Geographic Bounds Model
=======================
Static bounding box that defines the valid coordinate domain of the map.

All domain coordinates are rounded to 6 decimal places (~0.1 m) before
they are compared against the bounds or stored, so points sitting on a
boundary do not flicker in and out because of floating-point noise:

    lat' = ⌊lat × 10⁶ + ½⌋ / 10⁶
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from shapely.geometry import Polygon, box

COORD_PRECISION = 6
_SCALE = 10 ** COORD_PRECISION


def round6(value: float) -> float:
    """Round to 6 decimal places, ties toward +∞ (``Math.round`` semantics)."""
    return math.floor(value * _SCALE + 0.5) / _SCALE


# ── Geographic point ──────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A latitude / longitude pair in degrees."""

    lat: float
    lng: float

    def rounded(self) -> GeoPoint:
        return GeoPoint(round6(self.lat), round6(self.lng))

    def is_finite(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lng)


# ── Bounding Box (valid map domain) ───────────────────────────────
@dataclass(frozen=True, slots=True)
class GeoBounds:
    """
    A north/south/east/west rectangle in degrees.

    The sign of each edge is taken as given: in the western hemisphere
    both ``east`` and ``west`` are negative, and ``east > west`` still
    holds.
    """

    north: float
    south: float
    east: float
    west: float
    center: GeoPoint | None = None

    def __post_init__(self) -> None:
        if not self.north > self.south:
            raise ValueError(
                f"north ({self.north}) must be greater than south ({self.south})"
            )
        if not self.east > self.west:
            raise ValueError(
                f"east ({self.east}) must be greater than west ({self.west})"
            )
        if self.center is None:
            object.__setattr__(
                self,
                "center",
                GeoPoint(
                    (self.north + self.south) / 2,
                    (self.east + self.west) / 2,
                ),
            )

    @property
    def lat_span(self) -> float:
        return self.north - self.south

    @property
    def lng_span(self) -> float:
        return self.east - self.west

    def to_shapely(self) -> Polygon:
        """Return a Shapely box with x = longitude, y = latitude."""
        return box(self.west, self.south, self.east, self.north)

    def contains_point(self, point: GeoPoint) -> bool:
        """Inclusive containment test on the 6-dp rounded coordinate."""
        lat = round6(point.lat)
        lng = round6(point.lng)
        return (
            self.south <= lat <= self.north and self.west <= lng <= self.east
        )


YELLOWSTONE_BOUNDS = GeoBounds(
    north=45.1,
    south=44.1,
    east=-109.9,
    west=-111.2,
    center=GeoPoint(44.6, -110.5),
)


# ── Manual coordinate entry ───────────────────────────────────────
@dataclass(frozen=True, slots=True)
class LocationCheck:
    """Outcome of validating a user-entered location."""

    coordinates: GeoPoint | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.coordinates is not None and self.error is None


def _parse_float(text: str | float | None) -> float | None:
    if text is None:
        return None
    try:
        value = float(text)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def parse_manual_coordinates(
    lat_text: str | float | None,
    lng_text: str | float | None,
    bounds: GeoBounds = YELLOWSTONE_BOUNDS,
    area_name: str = "Yellowstone National Park",
) -> LocationCheck:
    """
    Validate latitude / longitude typed into a form.

    Never raises: unparseable or out-of-bounds input comes back as a
    ``LocationCheck`` carrying a message meant for the user.
    """
    lat = _parse_float(lat_text)
    lng = _parse_float(lng_text)
    if lat is None or lng is None:
        return LocationCheck(
            coordinates=None,
            error="Latitude and longitude must be numbers",
        )

    point = GeoPoint(lat, lng).rounded()
    if not bounds.contains_point(point):
        return LocationCheck(
            coordinates=point,
            error=f"Location must be within {area_name} boundaries",
        )
    return LocationCheck(coordinates=point)
