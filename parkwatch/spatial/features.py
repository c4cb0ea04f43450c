"""Static park features drawn beneath the sighting markers."""

from __future__ import annotations

from dataclasses import dataclass, field

from parkwatch.spatial.bounds import GeoPoint


@dataclass(frozen=True, slots=True)
class PointFeature:
    name: str
    point: GeoPoint
    kind: str
    elevation_ft: int | None = None


@dataclass(frozen=True, slots=True)
class PathFeature:
    """A polyline, or a polygon when ``closed`` is true."""

    name: str
    kind: str
    coords: tuple[GeoPoint, ...] = field(default_factory=tuple)
    closed: bool = False


def _path(name: str, kind: str, *pairs: tuple[float, float], closed: bool = False) -> PathFeature:
    return PathFeature(name, kind, tuple(GeoPoint(lat, lng) for lat, lng in pairs), closed)


LANDMARKS: tuple[PointFeature, ...] = (
    PointFeature("Old Faithful", GeoPoint(44.4605, -110.8281), "geyser", 7365),
    PointFeature("Grand Prismatic Spring", GeoPoint(44.5249, -110.8378), "hot_spring", 7270),
    PointFeature("Mammoth Hot Springs", GeoPoint(44.9766, -110.7036), "hot_spring", 6239),
    PointFeature("Grand Canyon of Yellowstone", GeoPoint(44.7197, -110.4969), "canyon", 7734),
    PointFeature("Yellowstone Lake", GeoPoint(44.4605, -110.3725), "lake", 7732),
    PointFeature("Mount Washburn", GeoPoint(44.7978, -110.4342), "mountain", 10243),
    PointFeature("Lamar Valley", GeoPoint(44.9167, -110.2167), "valley", 6500),
    PointFeature("Hayden Valley", GeoPoint(44.65, -110.4833), "valley", 7800),
    PointFeature("Tower Fall", GeoPoint(44.8917, -110.3917), "waterfall", 6600),
    PointFeature("West Thumb", GeoPoint(44.4167, -110.5667), "geyser_basin", 7730),
)

FACILITIES: tuple[PointFeature, ...] = (
    PointFeature("Old Faithful Visitor Center", GeoPoint(44.4605, -110.8281), "visitor_center"),
    PointFeature("Canyon Visitor Center", GeoPoint(44.7197, -110.4969), "visitor_center"),
    PointFeature("Mammoth Hot Springs Hotel", GeoPoint(44.9766, -110.7036), "lodging"),
    PointFeature("Lake Yellowstone Hotel", GeoPoint(44.4605, -110.3725), "lodging"),
    PointFeature("Grant Village", GeoPoint(44.4167, -110.5667), "lodging"),
    PointFeature("Tower Fall Campground", GeoPoint(44.8917, -110.3917), "camping"),
    PointFeature("Madison Campground", GeoPoint(44.6833, -110.8167), "camping"),
)

ROADS: tuple[PathFeature, ...] = (
    _path(
        "Grand Loop Road", "primary",
        (44.9766, -110.7036),  # Mammoth
        (44.8917, -110.3917),  # Tower Junction
        (44.7978, -110.4342),
        (44.7197, -110.4969),  # Canyon
        (44.65, -110.4833),
        (44.5994, -110.5472),  # Fishing Bridge
        (44.4605, -110.3725),
        (44.4167, -110.5667),  # West Thumb
        (44.4605, -110.8281),  # Old Faithful
        (44.5249, -110.8378),
        (44.6833, -110.8167),  # Madison
        (44.8333, -110.7833),  # Norris
        (44.9766, -110.7036),
    ),
    _path("North Entrance Road", "secondary", (45.0, -110.7), (44.9766, -110.7036)),
    _path("Northeast Entrance Road", "secondary", (44.9167, -110.2167), (44.8917, -110.3917)),
    _path("East Entrance Road", "secondary", (44.5, -109.9), (44.5994, -110.5472)),
    _path("South Entrance Road", "secondary", (44.1, -110.65), (44.4167, -110.5667)),
    _path("West Entrance Road", "secondary", (44.65, -111.1), (44.6833, -110.8167)),
)

TRAILS: tuple[PathFeature, ...] = (
    _path("Mount Washburn Trail", "moderate", (44.7978, -110.4342), (44.8, -110.43), (44.82, -110.425)),
    _path("Grand Prismatic Overlook", "easy", (44.5249, -110.8378), (44.528, -110.835), (44.532, -110.832)),
    _path("Uncle Tom's Trail", "moderate", (44.7197, -110.4969), (44.718, -110.495), (44.716, -110.493)),
    _path(
        "Lamar Valley Wildlife Loop", "easy",
        (44.9167, -110.2167), (44.92, -110.21), (44.925, -110.205), (44.92, -110.2), (44.915, -110.205),
    ),
)

WATER_BODIES: tuple[PathFeature, ...] = (
    _path(
        "Yellowstone Lake", "lake",
        (44.4, -110.4), (44.5, -110.35), (44.52, -110.25), (44.48, -110.2),
        (44.42, -110.22), (44.38, -110.28), (44.36, -110.35), (44.38, -110.42),
        closed=True,
    ),
    _path("Shoshone Lake", "lake", (44.35, -110.78), (44.37, -110.75), (44.36, -110.72), (44.34, -110.74), closed=True),
    _path("Lewis Lake", "lake", (44.28, -110.58), (44.3, -110.56), (44.29, -110.54), (44.27, -110.56), closed=True),
)

RIVERS: tuple[PathFeature, ...] = (
    _path(
        "Yellowstone River", "river",
        (44.4605, -110.3725), (44.5994, -110.5472), (44.65, -110.4833),
        (44.7197, -110.4969), (44.8917, -110.3917), (44.9167, -110.2167),
    ),
    _path("Madison River", "river", (44.6833, -110.8167), (44.65, -110.9), (44.6, -111.0)),
    _path("Firehole River", "river", (44.4605, -110.8281), (44.5249, -110.8378), (44.6833, -110.8167)),
)

LAND_COVER: tuple[PathFeature, ...] = (
    _path("forest", "forest", (44.8, -110.8), (44.9, -110.6), (44.7, -110.5), (44.6, -110.7), closed=True),
    _path("forest", "forest", (44.3, -110.2), (44.5, -110.1), (44.4, -110.4), (44.2, -110.3), closed=True),
    _path("grassland", "grassland", (44.9, -110.3), (45.0, -110.1), (44.8, -110.0), (44.7, -110.2), closed=True),
    _path("grassland", "grassland", (44.6, -110.5), (44.7, -110.4), (44.5, -110.3), (44.4, -110.4), closed=True),
    _path("thermal", "thermal", (44.5, -110.85), (44.55, -110.82), (44.52, -110.8), (44.47, -110.83), closed=True),
    _path("thermal", "thermal", (44.97, -110.71), (44.98, -110.69), (44.96, -110.68), (44.95, -110.7), closed=True),
)

ELEVATION_CONTOURS: tuple[PathFeature, ...] = (
    _path("6000 ft", "6000", (44.2, -110.8), (44.3, -110.6), (44.4, -110.4), (44.5, -110.2)),
    _path("6000 ft", "6000", (44.8, -110.8), (44.9, -110.6), (45.0, -110.4)),
    _path("7000 ft", "7000", (44.3, -110.7), (44.4, -110.5), (44.5, -110.3), (44.6, -110.1)),
    _path("7000 ft", "7000", (44.7, -110.7), (44.8, -110.5), (44.9, -110.3)),
    _path("8000 ft", "8000", (44.4, -110.6), (44.5, -110.4), (44.6, -110.2)),
    _path("8000 ft", "8000", (44.7, -110.6), (44.8, -110.4)),
    _path("9000 ft", "9000", (44.75, -110.45), (44.8, -110.43), (44.82, -110.41)),
)
