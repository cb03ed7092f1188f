"""Shared dependencies."""

from fastapi import Depends
from pymongo.database import Database

from app.db import get_database
from app.services.alert_store import AlertStore


def get_alert_store(db: Database = Depends(get_database)) -> AlertStore:
    """AlertStore bound to the request's database."""
    return AlertStore(db)
