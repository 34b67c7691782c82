"""File-backed place catalog.

The whole collection lives in one JSON array. Every operation loads it from
disk; mutations run load -> change -> atomic write under a single lock so two
writers never overwrite each other's change. Readers do not lock: the atomic
replace means they see either the old or the new file.
"""

from __future__ import annotations

import copy
import logging
import threading
from pathlib import Path
from typing import Any, Callable

from localguide.core.errors import DuplicateId, NotFound, PersistenceFailure, ValidationError
from localguide.services.distance import annotate
from localguide.services.json_storage import read_json, write_json_atomic

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "category", "lat", "lng")

Place = dict[str, Any]


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def place_defaults(lat: Any, lng: Any) -> Place:
    """Fields every new place gets unless the payload sets them."""
    return {
        "status": "available",
        "rating": 0,
        "review_count": 0,
        "price_range": "",
        "specialty": "",
        "stay_time": "",
        "menu_photo": "",
        "realtime_info": "",
        "description": "",
        "today_hours": "",
        "last_updated": "",
        "twitter_account": "",
        "instagram_account": "",
        "google_maps_url": f"https://maps.google.com/?q={lat},{lng}",
        "popular_menus": [],
    }


class PlaceStore:
    """CRUD over ``places.json``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._write_lock = threading.Lock()

    def ensure_file(self) -> None:
        """Create an empty collection if the file does not exist yet."""
        with self._write_lock:
            if not self.path.exists():
                write_json_atomic(self.path, [])
                logger.info("created empty place file %s", self.path)

    def _load(self) -> list[Place]:
        data = read_json(self.path, default=[])
        if not isinstance(data, list):
            raise PersistenceFailure(f"{self.path.name} is not a JSON array")
        return data

    def _save(self, places: list[Place]) -> None:
        write_json_atomic(self.path, places)

    @staticmethod
    def _index_of(places: list[Place], place_id: str) -> int:
        for index, place in enumerate(places):
            if place.get("id") == place_id:
                return index
        raise NotFound("place not found")

    # reads

    def list(
        self,
        category: str | None = None,
        lat: float | None = None,
        lng: float | None = None,
    ) -> list[Place]:
        """Return places, optionally filtered by category and annotated with distance."""
        places = self._load()
        if category and category != "all":
            places = [p for p in places if p.get("category") == category]
        if lat is not None and lng is not None:
            places = [annotate(p, lat, lng) for p in places]
        return places

    def get(self, place_id: str) -> Place:
        places = self._load()
        return places[self._index_of(places, place_id)]

    # writes

    def create(self, payload: Place) -> Place:
        missing = [field for field in REQUIRED_FIELDS if _is_missing(payload.get(field))]
        if missing:
            raise ValidationError("required fields: " + ", ".join(REQUIRED_FIELDS))
        try:
            lat, lng = float(payload["lat"]), float(payload["lng"])
        except (TypeError, ValueError) as exc:
            raise ValidationError("lat and lng must be numbers") from exc

        place_id = str(payload["id"])
        place = {**place_defaults(lat, lng), **payload, "id": place_id, "lat": lat, "lng": lng}

        with self._write_lock:
            places = self._load()
            if any(p.get("id") == place_id for p in places):
                raise DuplicateId(f'id "{place_id}" already exists')
            places.append(place)
            self._save(places)

        logger.info("place created: %s (%s)", place_id, place["name"])
        return place

    def modify(self, place_id: str, build_partial: Callable[[Place], Place]) -> Place:
        """Merge ``build_partial(current)`` into a place inside the write lock.

        ``id`` is always re-pinned to ``place_id``.
        """
        with self._write_lock:
            places = self._load()
            index = self._index_of(places, place_id)
            partial = build_partial(copy.deepcopy(places[index]))
            places[index] = {**places[index], **partial, "id": place_id}
            self._save(places)
            return places[index]

    def update(self, place_id: str, partial: Place) -> Place:
        """Shallow-merge ``partial`` into the stored place."""
        place = self.modify(place_id, lambda _current: partial)
        logger.info("place updated: %s", place_id)
        return place

    def delete(self, place_id: str) -> None:
        with self._write_lock:
            places = self._load()
            index = self._index_of(places, place_id)
            del places[index]
            self._save(places)
        logger.info("place deleted: %s", place_id)
