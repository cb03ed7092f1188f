"""Radius filtering of alerts around a point."""

import math
from typing import Iterable, List, Optional, Tuple

from app.errors import ValidationFailed
from app.services.alert_store import AlertStore
from app.services.distance import distance_km

DEFAULT_RADIUS_KM = 5.0


def _parse_float(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def parse_nearby_query(
    lat: Optional[str], lng: Optional[str], radius: Optional[str] = None
) -> Tuple[float, float, float]:
    """Validate raw query-string values into (lat, lng, radius_km)."""
    if lat is None or lng is None or not lat.strip() or not lng.strip():
        raise ValidationFailed("Location coordinates required")

    latitude = _parse_float(lat)
    longitude = _parse_float(lng)
    radius_km = DEFAULT_RADIUS_KM if radius is None or not radius.strip() else _parse_float(radius)
    if latitude is None or longitude is None or radius_km is None or radius_km <= 0:
        raise ValidationFailed("Invalid coordinates or radius")
    return latitude, longitude, radius_km


def filter_within_radius(
    alerts: Iterable[dict], lat: float, lng: float, radius_km: float = DEFAULT_RADIUS_KM
) -> List[dict]:
    """Alerts within ``radius_km`` of the point, input order preserved."""
    center = {"lat": lat, "lng": lng}
    return [
        alert for alert in alerts
        if distance_km(center, alert.get("coordinates")) <= radius_km
    ]


def find_nearby(
    store: AlertStore, lat: float, lng: float, radius_km: float = DEFAULT_RADIUS_KM
) -> List[dict]:
    # Full scan over the recency-sorted listing, so results stay newest first.
    return filter_within_radius(store.list_all(), lat, lng, radius_km)
