"""Alert creation and deletion rules: owner enrichment and ownership checks."""

import logging

from pymongo.database import Database

from app.auth import get_user_by_id
from app.errors import Forbidden, NotFound
from app.models.alert import AlertCreateRequest
from app.services.alert_store import AlertStore

logger = logging.getLogger("neighbor_alert.alerts")


def create_alert(db: Database, user_id: str, payload: AlertCreateRequest) -> dict:
    """Persist an alert authored by ``user_id``.

    Owner fields always come from the stored profile, frozen at creation time.
    """
    user = get_user_by_id(db, user_id)
    if user is None:
        raise NotFound("User not found")

    doc = payload.model_dump(mode="json")
    doc.update(
        user=user["_id"],
        userName=user.get("name", ""),
        userContact=user.get("phoneNumber") or "",
    )
    return AlertStore(db).insert(doc)


def delete_alert(db: Database, user_id: str, alert_id: str) -> None:
    store = AlertStore(db)
    alert = store.get(alert_id)
    if alert is None:
        raise NotFound("Alert not found")
    if str(alert.get("user")) != user_id:
        logger.warning("User %s tried to delete alert %s owned by %s", user_id, alert_id, alert.get("user"))
        raise Forbidden("Not authorized to delete this alert")
    if not store.delete(alert_id):
        # Removed concurrently between the read and the delete.
        raise NotFound("Alert not found")
    logger.info("Alert %s deleted by %s", alert_id, user_id, extra={"alert_id": alert_id})
