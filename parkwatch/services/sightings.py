"""
Sighting Service
================
Business logic over the sightings store: filtering, reporting, editing
and the dashboard counters.

New reports are inserted at the front of the stored list, so the file
is always newest-first.  Coordinates are rounded to 6 dp and must fall
inside the park bounds before anything is written.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from parkwatch.models.store import JsonStore
from parkwatch.schemas.wildlife import (
    Coordinates,
    Sighting,
    SightingCreate,
    SightingStats,
    User,
)
from parkwatch.spatial.bounds import GeoBounds, GeoPoint
from parkwatch.spatial.layers import Marker

logger = logging.getLogger(__name__)

ACTIVE_THREAT_WINDOW = timedelta(hours=24)

SPECIES_BY_TYPE: dict[str, list[str]] = {
    "bear": ["Grizzly Bear", "Black Bear"],
    "wolf": ["Gray Wolf"],
    "bison": ["American Bison"],
    "elk": ["Rocky Mountain Elk"],
    "deer": ["Mule Deer", "White-tailed Deer"],
    "eagle": ["Bald Eagle", "Golden Eagle"],
    "rare": ["Mountain Lion", "Lynx", "Wolverine", "Moose"],
}


class LocationOutOfBounds(ValueError):
    """Raised when a report's coordinates lie outside the park."""


@dataclass(frozen=True)
class SightingFilter:
    search: str = ""
    type: str = "all"
    threat: str = "all"

    def matches(self, sighting: Sighting, reporter_names: dict[str, str]) -> bool:
        term = self.search.lower()
        if term:
            reporter = reporter_names.get(sighting.reporter_id, "").lower()
            if not (
                term in sighting.species.lower()
                or term in sighting.description.lower()
                or term in reporter
            ):
                return False
        if self.type != "all" and sighting.type != self.type:
            return False
        if self.threat != "all" and sighting.threat_level != self.threat:
            return False
        return True


def to_marker(sighting: Sighting) -> Marker:
    return Marker(
        id=sighting.id,
        point=GeoPoint(sighting.coordinates.lat, sighting.coordinates.lng),
        type=sighting.type,
        threat_level=sighting.threat_level,
        label=sighting.species,
    )


def export_filename(today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"yellowstone-sightings-{today.isoformat()}.json"


class SightingService:
    """Operates on a ``JsonStore[Sighting]``; one instance per request."""

    def __init__(
        self,
        store: JsonStore[Sighting],
        bounds: GeoBounds,
        park_name: str = "Yellowstone National Park",
    ) -> None:
        self.store = store
        self.bounds = bounds
        self.park_name = park_name

    # ── Queries ───────────────────────────────────────────────

    def list_all(self) -> list[Sighting]:
        return self.store.read_all()

    def get(self, sighting_id: str) -> Sighting | None:
        return next((s for s in self.list_all() if s.id == sighting_id), None)

    def filter(
        self,
        criteria: SightingFilter,
        users: list[User] | None = None,
    ) -> list[Sighting]:
        names = {u.id: u.name for u in users or []}
        return [s for s in self.list_all() if criteria.matches(s, names)]

    def stats(self, now: datetime | None = None) -> SightingStats:
        now = now or datetime.now(timezone.utc)
        cutoff = now - ACTIVE_THREAT_WINDOW
        sightings = self.list_all()
        return SightingStats(
            total_sightings=len(sightings),
            active_threat=sum(
                1 for s in sightings
                if s.threat_level == "high" and _aware(s.timestamp) > cutoff
            ),
            rare_species=sum(1 for s in sightings if s.type == "rare"),
            active_users=len({s.reporter_id for s in sightings}),
        )

    def active_threats(self, now: datetime | None = None, limit: int = 5) -> list[Sighting]:
        now = now or datetime.now(timezone.utc)
        cutoff = now - ACTIVE_THREAT_WINDOW
        hits = [
            s for s in self.list_all()
            if s.threat_level == "high" and _aware(s.timestamp) > cutoff
        ]
        return hits[:limit]

    # ── Mutations ─────────────────────────────────────────────

    def _checked_coordinates(self, coords: Coordinates) -> Coordinates:
        point = GeoPoint(coords.lat, coords.lng).rounded()
        if not self.bounds.contains_point(point):
            raise LocationOutOfBounds(
                f"Location must be within {self.park_name} boundaries"
            )
        return Coordinates(lat=point.lat, lng=point.lng)

    def create(self, payload: SightingCreate, now: datetime | None = None) -> Sighting:
        now = now or datetime.now(timezone.utc)
        coordinates = self._checked_coordinates(payload.coordinates)
        sightings = self.list_all()
        sighting = Sighting(
            **payload.model_dump(exclude={"coordinates"}),
            coordinates=coordinates,
            id=_new_id({s.id for s in sightings}),
            timestamp=now,
        )
        sightings.insert(0, sighting)
        self.store.write_all(sightings)
        logger.info("Created sighting %s (%s)", sighting.id, sighting.species)
        return sighting

    def update(self, sighting: Sighting) -> Sighting | None:
        sightings = self.list_all()
        for i, existing in enumerate(sightings):
            if existing.id == sighting.id:
                updated = sighting.model_copy(
                    update={"coordinates": self._checked_coordinates(sighting.coordinates)}
                )
                sightings[i] = updated
                self.store.write_all(sightings)
                logger.info("Updated sighting %s", sighting.id)
                return updated
        return None

    def delete(self, sighting_id: str) -> bool:
        sightings = self.list_all()
        remaining = [s for s in sightings if s.id != sighting_id]
        if len(remaining) == len(sightings):
            return False
        self.store.write_all(remaining)
        logger.info("Deleted sighting %s", sighting_id)
        return True


def _aware(ts: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def _new_id(existing: set[str]) -> str:
    """Millisecond timestamp, suffixed ``-1``, ``-2`` … on collision."""
    base = str(int(time.time() * 1000))
    candidate, n = base, 0
    while candidate in existing:
        n += 1
        candidate = f"{base}-{n}"
    return candidate
