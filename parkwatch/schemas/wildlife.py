"""
Pydantic schemas for API request/response serialization.

Stored records keep the camelCase field names of the JSON files
(``reporterId``, ``threatLevel`` …); Python code uses snake_case.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ThreatLevel = Literal["low", "medium", "high"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ═══════════════════════════════════════════════════════════════════
# Coordinates
# ═══════════════════════════════════════════════════════════════════
class Coordinates(BaseModel):
    lat: float
    lng: float

    @field_validator("lat", "lng")
    @classmethod
    def finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Coordinate must be a finite number")
        return v


# ═══════════════════════════════════════════════════════════════════
# Sighting schemas
# ═══════════════════════════════════════════════════════════════════
class SightingCreate(CamelModel):
    """A new report.  ``id`` and ``timestamp`` are assigned by the server."""

    type: str = Field(min_length=1)
    species: str = Field(min_length=1)
    coordinates: Coordinates
    reporter_id: str = Field(min_length=1)
    description: str = ""
    threat_level: ThreatLevel = "low"
    verified: bool = False
    images: list[str] = Field(default_factory=list)


class Sighting(SightingCreate):
    id: str
    timestamp: datetime


class SightingStats(CamelModel):
    total_sightings: int
    active_threat: int
    rare_species: int
    active_users: int


class LocationValidationRequest(BaseModel):
    """Raw text from the manual latitude / longitude inputs."""

    lat: str
    lng: str


class LocationValidationResponse(BaseModel):
    valid: bool
    coordinates: Coordinates | None = None
    error: str | None = None


# ═══════════════════════════════════════════════════════════════════
# User schemas
# ═══════════════════════════════════════════════════════════════════
class User(CamelModel):
    id: str
    name: str
    username: str
    avatar: str = ""
    join_date: str
    sightings_count: int = 0
    verified: bool = False
    bio: str = ""


class UserProfile(CamelModel):
    user: User
    recent_sightings: list[Sighting]
    sightings_by_type: dict[str, int]
    verified_sightings: int
    verification_rate: str = Field(description="Percentage with one decimal, e.g. '66.7'")


# ═══════════════════════════════════════════════════════════════════
# Map engine schemas
# ═══════════════════════════════════════════════════════════════════
class PixelIn(BaseModel):
    x: float
    y: float

    @field_validator("x", "y")
    @classmethod
    def finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Pixel coordinate must be a finite number")
        return v


class PixelOut(BaseModel):
    x: float
    y: float
    visible: bool = True


class ViewportIn(BaseModel):
    """Client-held viewport state sent with each map request."""

    zoom: float = Field(default=1.0, gt=0)
    pan_x: float = 0.0
    pan_y: float = 0.0

    @field_validator("zoom", "pan_x", "pan_y")
    @classmethod
    def finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Viewport values must be finite")
        return v


class MapConfigResponse(BaseModel):
    park_name: str
    bounds: dict = Field(description="{north, south, east, west}")
    center: Coordinates
    canvas: dict = Field(description="{width, height}")
    grid_size: float
    zoom_range: tuple[float, float]
    zoom_step: float
    visibility_margin: float


class ProjectRequest(BaseModel):
    viewport: ViewportIn = Field(default_factory=ViewportIn)
    points: list[Coordinates]


class ProjectResponse(BaseModel):
    pixels: list[PixelOut]


class UnprojectRequest(BaseModel):
    viewport: ViewportIn = Field(default_factory=ViewportIn)
    pixel: PixelIn


class PickResponse(BaseModel):
    """``coordinates`` is null when the click fell outside the park."""

    coordinates: Coordinates | None = None


class ZoomRequest(BaseModel):
    viewport: ViewportIn = Field(default_factory=ViewportIn)
    action: Literal["in", "out", "reset"]


class HeatBinOut(BaseModel):
    lat: float = Field(description="Lower-left corner latitude of the bin")
    lng: float = Field(description="Lower-left corner longitude of the bin")
    intensity: int
    radius: float = Field(description="Display radius in px")


class HeatmapResponse(BaseModel):
    grid_size: float
    bins: list[HeatBinOut]


class RenderRequest(BaseModel):
    viewport: ViewportIn = Field(default_factory=ViewportIn)
    preset: str | None = None
    layers: dict[str, bool] = Field(default_factory=dict)
    selected_id: str | None = None
    hovered_id: str | None = None
    heat_intensity: float = Field(
        default=0.7, ge=0.0, le=1.0, description="Heatmap opacity"
    )
    type: str = "all"
    threat: str = "all"
    search: str = ""


class DrawableOut(BaseModel):
    layer: str
    kind: str
    points: list[PixelOut]
    radius: float = 0.0
    label: str = ""
    ref_id: str | None = None
    style: str = ""
    anchor: PixelOut | None = None
    selected: bool = False
    hovered: bool = False
    intensity: int | None = None
    opacity: float | None = None


class RenderResponse(BaseModel):
    viewport: ViewportIn
    layers: dict[str, bool]
    drawables: list[DrawableOut]
