"""Persistence for alert documents (the ``alerts`` collection)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.database import Database

logger = logging.getLogger("neighbor_alert.alerts")

COLLECTION = "alerts"
# _id breaks ties between alerts created in the same millisecond.
NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


def _object_id(value) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


class AlertStore:
    """Insert, delete and recency-ordered listing of alerts. No updates."""

    def __init__(self, db: Database):
        self.collection = db[COLLECTION]

    def insert(self, alert: dict) -> dict:
        doc = dict(alert)
        doc.pop("_id", None)
        now = datetime.now(timezone.utc)
        # Mongo keeps millisecond precision; match it so reads echo the same value.
        doc["createdAt"] = now.replace(microsecond=now.microsecond // 1000 * 1000)
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Alert %s stored", doc["_id"], extra={"alert_id": str(doc["_id"])})
        return doc

    def get(self, alert_id) -> Optional[dict]:
        oid = _object_id(alert_id)
        if oid is None:
            return None
        return self.collection.find_one({"_id": oid})

    def delete(self, alert_id) -> bool:
        """True when a document was removed, False when none matched."""
        oid = _object_id(alert_id)
        if oid is None:
            return False
        return self.collection.delete_one({"_id": oid}).deleted_count == 1

    def list_all(self) -> List[dict]:
        return list(self.collection.find().sort(NEWEST_FIRST))

    def list_by_owner(self, owner_id) -> List[dict]:
        oid = _object_id(owner_id)
        if oid is None:
            return []
        return list(self.collection.find({"user": oid}).sort(NEWEST_FIRST))
