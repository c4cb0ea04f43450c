"""
Spatial Binning (heatmap density)
=================================
Aggregates sighting coordinates into a fixed geographic grid.

Each point falls into the cell whose lower-left corner is

    (⌊lat / g⌋ × g,  ⌊lng / g⌋ × g)      g = grid size in degrees

and a cell's intensity is the number of points that fell into it.  Bins
are always recomputed from scratch; point sets are small (hundreds).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from parkwatch.spatial.bounds import GeoPoint

DEFAULT_GRID_SIZE = 0.02
HEAT_RADIUS_SLOPE = 15.0
HEAT_RADIUS_CAP = 50.0


@dataclass(frozen=True, slots=True)
class HeatBin:
    """One grid cell.  ``lat`` / ``lng`` are the floor corner, not the centre."""

    lat: float
    lng: float
    intensity: int
    grid_size: float = DEFAULT_GRID_SIZE

    @property
    def corner(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)

    @property
    def center(self) -> GeoPoint:
        half = self.grid_size / 2
        return GeoPoint(self.lat + half, self.lng + half)


def heat_radius(
    intensity: int,
    slope: float = HEAT_RADIUS_SLOPE,
    cap: float = HEAT_RADIUS_CAP,
) -> float:
    """Display radius (px) for a bin: linear in intensity, capped."""
    return min(intensity * slope, cap)


class SpatialBinner:
    """Counts points per grid cell of ``grid_size`` degrees."""

    def __init__(self, grid_size: float = DEFAULT_GRID_SIZE) -> None:
        if not grid_size > 0:
            raise ValueError(f"grid_size must be positive, got {grid_size}")
        self.grid_size = grid_size

    def bin_key(self, point: GeoPoint) -> tuple[float, float]:
        g = self.grid_size
        return (
            float(np.floor(point.lat / g) * g),
            float(np.floor(point.lng / g) * g),
        )

    def compute_bins(self, points: Iterable[GeoPoint]) -> list[HeatBin]:
        coords = np.array([(p.lat, p.lng) for p in points], dtype=np.float64)
        if coords.size == 0:
            return []

        g = self.grid_size
        keys = np.floor(coords / g) * g
        unique, counts = np.unique(keys, axis=0, return_counts=True)

        return [
            HeatBin(
                lat=float(lat),
                lng=float(lng),
                intensity=int(count),
                grid_size=g,
            )
            for (lat, lng), count in zip(unique, counts)
        ]
