"""Services subpackage — business logic over the stores and map engine."""

from parkwatch.services.heatmap import HeatmapCache, get_heatmap_cache
from parkwatch.services.profile import build_profile
from parkwatch.services.sightings import (
    LocationOutOfBounds,
    SightingFilter,
    SightingService,
    export_filename,
    to_marker,
)
from parkwatch.services.viewport import build_transform, pixel_out, viewport_out

__all__ = [
    "HeatmapCache",
    "get_heatmap_cache",
    "build_profile",
    "LocationOutOfBounds",
    "SightingFilter",
    "SightingService",
    "export_filename",
    "to_marker",
    "build_transform",
    "pixel_out",
    "viewport_out",
]
