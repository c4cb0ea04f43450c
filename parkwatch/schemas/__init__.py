"""Schemas subpackage — Pydantic request/response models."""

from parkwatch.schemas.wildlife import (
    Coordinates,
    DrawableOut,
    HeatBinOut,
    HeatmapResponse,
    LocationValidationRequest,
    LocationValidationResponse,
    MapConfigResponse,
    PickResponse,
    PixelIn,
    PixelOut,
    ProjectRequest,
    ProjectResponse,
    RenderRequest,
    RenderResponse,
    Sighting,
    SightingCreate,
    SightingStats,
    UnprojectRequest,
    User,
    UserProfile,
    ViewportIn,
    ZoomRequest,
)

__all__ = [
    "Coordinates",
    "DrawableOut",
    "HeatBinOut",
    "HeatmapResponse",
    "LocationValidationRequest",
    "LocationValidationResponse",
    "MapConfigResponse",
    "PickResponse",
    "PixelIn",
    "PixelOut",
    "ProjectRequest",
    "ProjectResponse",
    "RenderRequest",
    "RenderResponse",
    "Sighting",
    "SightingCreate",
    "SightingStats",
    "UnprojectRequest",
    "User",
    "UserProfile",
    "ViewportIn",
    "ZoomRequest",
]
