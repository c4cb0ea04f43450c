"""
Heatmap Cache
=============
Holds the latest heat bins computed from the sightings store and keeps
them fresh with a periodic background task.

The task is owned by the application lifespan: ``start()`` on startup,
``stop()`` on shutdown (which cancels the pending sleep, so no timer is
leaked).  Bins are always recomputed in full.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import datetime, timezone

from parkwatch.config import get_settings
from parkwatch.models.store import JsonStore, get_sighting_store
from parkwatch.schemas.wildlife import Sighting
from parkwatch.spatial.binning import HeatBin, SpatialBinner
from parkwatch.spatial.bounds import GeoPoint

logger = logging.getLogger(__name__)


class HeatmapCache:
    def __init__(self, store: JsonStore[Sighting], binner: SpatialBinner) -> None:
        self.store = store
        self.binner = binner
        self.bins: list[HeatBin] = []
        self.refreshed_at: datetime | None = None
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def refresh(self, sightings: list[Sighting] | None = None) -> list[HeatBin]:
        """Recompute bins from ``sightings`` (or from the store)."""
        if sightings is None:
            sightings = self.store.read_all()
        points = [GeoPoint(s.coordinates.lat, s.coordinates.lng) for s in sightings]
        self.bins = self.binner.compute_bins(points)
        self.refreshed_at = datetime.now(timezone.utc)
        logger.debug("Heatmap refreshed: %d points → %d bins", len(points), len(self.bins))
        return self.bins

    async def _run(self, interval_s: float) -> None:
        while True:
            try:
                # Store I/O is blocking; keep it off the event loop.
                await asyncio.to_thread(self.refresh)
            except Exception:
                logger.exception("Heatmap refresh failed")
            await asyncio.sleep(interval_s)

    def start(self, interval_s: float) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(interval_s), name="heatmap-refresh")
        logger.info("Heatmap refresh every %.1fs", interval_s)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None


_cache_instance: HeatmapCache | None = None


def get_heatmap_cache() -> HeatmapCache:
    """Return the singleton ``HeatmapCache``."""
    global _cache_instance
    if _cache_instance is None:
        settings = get_settings()
        _cache_instance = HeatmapCache(
            get_sighting_store(), SpatialBinner(settings.grid_size)
        )
    return _cache_instance
