"""
JSON-file stores for sightings and users.

Each store keeps one ordered JSON array on disk and reads / writes it
wholesale on every call.  There is no locking and no durability
guarantee; the files are small and single-writer.

Missing or unparseable files
----------------------------
When the file does not exist (or is not JSON) the store writes the seed
records and returns them, so a fresh checkout always has data to show on
the map.  A file that parses but holds invalid records raises
``ValidationError`` and is left untouched.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from pathlib import Path
from typing import Callable, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from parkwatch.config import get_settings
from parkwatch.schemas.wildlife import Coordinates, Sighting, User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class JsonStore(Generic[ModelT]):
    """A list of pydantic records persisted as one JSON array."""

    def __init__(
        self,
        path: Path,
        model: type[ModelT],
        seed: Callable[[], list[ModelT]] | None = None,
    ) -> None:
        self.path = Path(path)
        self.model = model
        self._adapter = TypeAdapter(list[model])
        self._seed = seed or list

    def read_all(self) -> list[ModelT]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.info("No %s yet, seeding a new one", self.path)
            return self._reseed()
        except ValueError:
            logger.warning("Unparseable JSON in %s, seeding a new one", self.path)
            return self._reseed()

        try:
            return self._adapter.validate_python(data)
        except ValidationError:
            # Parseable but invalid records are never overwritten.
            logger.error("Invalid records in %s", self.path, exc_info=True)
            raise

    def _reseed(self) -> list[ModelT]:
        records = self._seed()
        self.write_all(records)
        return records

    def write_all(self, records: list[ModelT]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = self._adapter.dump_python(records, mode="json", by_alias=True)
        try:
            self.path.write_text(
                json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError:
            logger.error("Failed to write %s", self.path, exc_info=True)
            raise


# ── Seed data ─────────────────────────────────────────────────────
def default_sightings(now: datetime | None = None) -> list[Sighting]:
    now = now or datetime.now(timezone.utc)
    rows = [
        ("1", "bear", "Grizzly Bear", 44.428, -110.5885, "user1",
         "Large grizzly bear spotted near hiking trail", "high", True),
        ("2", "wolf", "Gray Wolf", 44.5994, -110.5472, "user2",
         "Pack of 3 wolves observed hunting", "medium", True),
        ("3", "rare", "Canada Lynx", 44.7291, -110.0584, "user3",
         "Rare Canada Lynx sighting in daylight", "high", False),
        ("4", "bison", "American Bison", 44.8652, -110.6808, "user1",
         "Large herd of bison grazing in Lamar Valley", "low", True),
        ("5", "bison", "American Bison", 44.628, -110.2885, "user2",
         "Bison spotted near the river.", "low", True),
    ]
    return [
        Sighting(
            id=sid,
            type=kind,
            species=species,
            coordinates=Coordinates(lat=lat, lng=lng),
            timestamp=now - timedelta(hours=i),
            reporter_id=reporter,
            description=description,
            threat_level=threat,
            verified=verified,
            images=[],
        )
        for i, (sid, kind, species, lat, lng, reporter, description, threat, verified)
        in enumerate(rows)
    ]


def default_users() -> list[User]:
    rows = [
        ("user1", "Sarah Johnson", "wildlifewatcher", "🧑‍🔬", "2024-01-15", 23, True,
         "Wildlife biologist and nature enthusiast"),
        ("user2", "Mike Chen", "trailrunner", "🏃‍♂️", "2024-02-20", 15, True,
         "Trail runner and outdoor photographer"),
        ("user3", "Emma Davis", "naturelover", "🌲", "2024-03-10", 8, False,
         "Hiking enthusiast and wildlife observer"),
        ("user4", "Alex Rivera", "mountainguide", "🏔️", "2024-01-05", 31, True,
         "Professional mountain guide and wildlife tracker"),
        ("user5", "Jordan Park", "forestexplorer", "🌿", "2024-02-28", 12, False,
         "Forest conservation volunteer and amateur photographer"),
    ]
    return [
        User(
            id=uid, name=name, username=username, avatar=avatar, join_date=joined,
            sightings_count=count, verified=verified, bio=bio,
        )
        for uid, name, username, avatar, joined, count, verified, bio in rows
    ]


# ── Cached factories (FastAPI dependencies) ───────────────────────
@lru_cache(maxsize=1)
def get_sighting_store() -> JsonStore[Sighting]:
    settings = get_settings()
    return JsonStore(settings.sightings_path, Sighting, default_sightings)


@lru_cache(maxsize=1)
def get_user_store() -> JsonStore[User]:
    settings = get_settings()
    return JsonStore(settings.users_path, User, default_users)
