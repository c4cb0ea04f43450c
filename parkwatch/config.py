"""
ParkWatch — Configuration via pydantic-settings.

Environment variables override defaults.  The park bounds and canvas size
are the bridge between geographic coordinates and screen pixels; every
map-engine parameter is injectable so the engine can be reused for other
parks or regions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import ClassVar

from pydantic_settings import BaseSettings, SettingsConfigDict

from parkwatch.spatial.bounds import GeoBounds, GeoPoint
from parkwatch.spatial.transform import CanvasSize


class Settings(BaseSettings):
    env_path: ClassVar[str] = str(Path(__file__).resolve().parents[1] / ".env")
    model_config = SettingsConfigDict(
        env_file=env_path,
        env_file_encoding="utf-8",
        env_prefix="PARKWATCH_",
        # Ignore unrelated environment variables so loading the env_file
        # does not cause validation errors for unknown keys.
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────
    app_name: str = "ParkWatch"
    debug: bool = False

    # ── JSON storage ───────────────────────────────────────────────
    data_dir: Path = Path("data")
    sightings_file: str = "sightings.json"
    users_file: str = "users.json"

    @property
    def sightings_path(self) -> Path:
        return Path(self.data_dir) / self.sightings_file

    @property
    def users_path(self) -> Path:
        return Path(self.data_dir) / self.users_file

    # ── Park bounds (degrees) ──────────────────────────────────────
    # West/east are negative in the western hemisphere.
    park_name: str = "Yellowstone National Park"
    bounds_north: float = 45.1
    bounds_south: float = 44.1
    bounds_east: float = -109.9
    bounds_west: float = -111.2
    center_lat: float = 44.6
    center_lng: float = -110.5

    @property
    def bounds(self) -> GeoBounds:
        return GeoBounds(
            north=self.bounds_north,
            south=self.bounds_south,
            east=self.bounds_east,
            west=self.bounds_west,
            center=GeoPoint(self.center_lat, self.center_lng),
        )

    # ── Map engine ─────────────────────────────────────────────────
    canvas_width: int = 800
    canvas_height: int = 600
    zoom_min: float = 0.5
    zoom_max: float = 4.0
    zoom_step: float = 1.5
    visibility_margin: float = 50.0
    grid_size: float = 0.02

    @property
    def canvas(self) -> CanvasSize:
        return CanvasSize(float(self.canvas_width), float(self.canvas_height))

    @property
    def zoom_range(self) -> tuple[float, float]:
        return (self.zoom_min, self.zoom_max)

    # ── Heatmap refresh ────────────────────────────────────────────
    # Seconds between background recomputations of the cached heatmap.
    refresh_interval_s: float = 30.0

    # ── CORS ───────────────────────────────────────────────────────
    # Allowed CORS origins.
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse the comma-separated CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
