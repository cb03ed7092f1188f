"""Great-circle distance between two lat/lng points (Haversine)."""

import math
from typing import Any, Mapping, Optional

EARTH_RADIUS_KM = 6371.0
MIN_DISTANCE_KM = 0.1


def _coord(point: Optional[Mapping[str, Any]], key: str) -> Optional[float]:
    if not isinstance(point, Mapping):
        return None
    value = point.get(key)
    # bool is an int subclass; never a coordinate.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def distance_km(a: Optional[Mapping[str, Any]], b: Optional[Mapping[str, Any]]) -> float:
    """Distance in km between two ``{"lat", "lng"}`` points.

    Floored at 0.1 km so identical points never read "0.0 km". A point with a
    missing or non-numeric axis is infinitely far away, which keeps it out of
    every radius filter.
    """
    lat1, lng1 = _coord(a, "lat"), _coord(a, "lng")
    lat2, lng2 = _coord(b, "lat"), _coord(b, "lng")
    if None in (lat1, lng1, lat2, lng2):
        return math.inf

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return max(MIN_DISTANCE_KM, EARTH_RADIUS_KM * c)
