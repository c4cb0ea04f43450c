"""Routers subpackage — HTTP layer for all API endpoints."""

from parkwatch.routers import maps, sightings, users

__all__ = ["maps", "sightings", "users"]
