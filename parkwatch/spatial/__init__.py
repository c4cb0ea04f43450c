"""Spatial subpackage — bounds, viewport transform, binning, interaction and layers."""

from parkwatch.spatial.binning import HeatBin, SpatialBinner, heat_radius
from parkwatch.spatial.bounds import (
    YELLOWSTONE_BOUNDS,
    GeoBounds,
    GeoPoint,
    LocationCheck,
    parse_manual_coordinates,
    round6,
)
from parkwatch.spatial.interaction import DragState, InteractionController, InteractionState
from parkwatch.spatial.layers import (
    Drawable,
    LayerDescriptor,
    LayerVisibility,
    Marker,
    RenderContext,
    RenderLayerSet,
)
from parkwatch.spatial.transform import CanvasSize, PixelPoint, ViewportState, ViewportTransform

__all__ = [
    "YELLOWSTONE_BOUNDS",
    "CanvasSize",
    "DragState",
    "Drawable",
    "GeoBounds",
    "GeoPoint",
    "HeatBin",
    "InteractionController",
    "InteractionState",
    "LayerDescriptor",
    "LayerVisibility",
    "LocationCheck",
    "Marker",
    "PixelPoint",
    "RenderContext",
    "RenderLayerSet",
    "SpatialBinner",
    "ViewportState",
    "ViewportTransform",
    "heat_radius",
    "parse_manual_coordinates",
    "round6",
]
