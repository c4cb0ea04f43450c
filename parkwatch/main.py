"""
ParkWatch — FastAPI Application
===============================
Wildlife sighting reports on a flat map of the park, with a JSON-file
store and a stateless viewport / heatmap engine.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from parkwatch import __version__
from parkwatch.config import get_settings
from parkwatch.routers import maps, sightings, users

logger = logging.getLogger(__name__)
settings = get_settings()


# ── Lifespan (startup / shutdown) ─────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
        - Seed the JSON stores if they are missing.
        - Start the periodic heatmap refresh.
    Shutdown:
        - Cancel the heatmap refresh task.
    """
    logger.info("ParkWatch starting up (data_dir=%s)", settings.data_dir)

    from parkwatch.models.store import get_sighting_store, get_user_store
    from parkwatch.services.heatmap import get_heatmap_cache

    n_sightings = len(get_sighting_store().read_all())
    n_users = len(get_user_store().read_all())
    logger.info("Loaded %d sightings and %d users", n_sightings, n_users)

    cache = get_heatmap_cache()
    cache.refresh()
    cache.start(settings.refresh_interval_s)

    yield

    await cache.stop()
    logger.info("ParkWatch shut down.")


# ── App factory ───────────────────────────────────────────────────
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description=(
            "Wildlife sighting reports and an interactive park map with "
            "pan / zoom, location picking and activity heatmaps."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # CORS for the map front end (configurable via PARKWATCH_CORS_ORIGINS).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(sightings.router, prefix="/api")
    app.include_router(users.router, prefix="/api")
    app.include_router(maps.router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": settings.app_name}

    return app


# ── Module-level app instance (for `uvicorn parkwatch.main:app`) ──
app = create_app()  # pragma: no cover
