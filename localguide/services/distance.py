"""Great-circle distance and walking-time display fields."""

from __future__ import annotations

import logging
import math
from typing import Any

EARTH_RADIUS_KM = 6371.0
WALK_MINUTES_PER_KM = 12

logger = logging.getLogger(__name__)


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance in km between two (lat, lng) points."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def format_distance(distance_km: float) -> str:
    """``500m`` below one kilometre, ``2.3km`` otherwise."""
    if distance_km < 1:
        # half-up, not banker's rounding
        return f"{math.floor(distance_km * 1000 + 0.5)}m"
    return f"{distance_km:.1f}km"


def walk_time(distance_km: float) -> str:
    return f"{math.ceil(distance_km * WALK_MINUTES_PER_KM)}分"


def annotate(place: dict[str, Any], lat: float, lng: float) -> dict[str, Any]:
    """Return a copy of ``place`` with ``distance`` and ``walk_time`` from the observer.

    A place without usable coordinates is returned unannotated.
    """
    try:
        place_lat, place_lng = float(place["lat"]), float(place["lng"])
    except (KeyError, TypeError, ValueError):
        logger.warning("place %s has no usable coordinates; skipping distance", place.get("id"))
        return dict(place)
    distance_km = haversine_km(lat, lng, place_lat, place_lng)
    return {**place, "distance": format_distance(distance_km), "walk_time": walk_time(distance_km)}
