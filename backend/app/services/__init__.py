"""Business logic services for the Neighbor Alert API."""

from app.services.distance import distance_km
from app.services.alert_store import AlertStore
from app.services.proximity import filter_within_radius, find_nearby, parse_nearby_query
from app.services.alerts import create_alert, delete_alert

__all__ = [
    "distance_km",
    "AlertStore",
    "filter_within_radius",
    "find_nearby",
    "parse_nearby_query",
    "create_alert",
    "delete_alert",
]
