"""Alert routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pymongo.database import Database

from app.auth import require_user_id
from app.db import get_database
from app.dependencies import get_alert_store
from app.models.alert import AlertCreateRequest, AlertResponse
from app.models.auth import MessageResponse
from app.services.alert_store import AlertStore
from app.services.alerts import create_alert, delete_alert
from app.services.proximity import find_nearby, parse_nearby_query

router = APIRouter()


def _to_responses(docs: List[dict]) -> List[AlertResponse]:
    return [AlertResponse.from_doc(doc) for doc in docs]


@router.get("", response_model=List[AlertResponse])
def list_alerts(store: AlertStore = Depends(get_alert_store)) -> List[AlertResponse]:
    """All alerts, most recent first."""
    return _to_responses(store.list_all())


@router.get("/nearby", response_model=List[AlertResponse])
def list_nearby_alerts(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    radius: Optional[str] = None,
    store: AlertStore = Depends(get_alert_store),
) -> List[AlertResponse]:
    """Alerts within ``radius`` km (default 5) of lat/lng, most recent first."""
    latitude, longitude, radius_km = parse_nearby_query(lat, lng, radius)
    return _to_responses(find_nearby(store, latitude, longitude, radius_km))


@router.get("/my-alerts", response_model=List[AlertResponse])
def list_my_alerts(
    user_id: str = Depends(require_user_id),
    store: AlertStore = Depends(get_alert_store),
) -> List[AlertResponse]:
    return _to_responses(store.list_by_owner(user_id))


@router.post("", response_model=AlertResponse, status_code=201)
def post_alert(
    payload: AlertCreateRequest,
    user_id: str = Depends(require_user_id),
    db: Database = Depends(get_database),
) -> AlertResponse:
    """Create an alert owned by the authenticated caller."""
    return AlertResponse.from_doc(create_alert(db, user_id, payload))


@router.delete("/{alert_id}", response_model=MessageResponse)
def remove_alert(
    alert_id: str,
    user_id: str = Depends(require_user_id),
    db: Database = Depends(get_database),
) -> MessageResponse:
    delete_alert(db, user_id, alert_id)
    return MessageResponse(message="Alert deleted")
