"""Models subpackage — JSON-file persistence."""

from parkwatch.models.store import (
    JsonStore,
    default_sightings,
    default_users,
    get_sighting_store,
    get_user_store,
)

__all__ = [
    "JsonStore",
    "default_sightings",
    "default_users",
    "get_sighting_store",
    "get_user_store",
]
