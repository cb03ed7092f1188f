"""Health check endpoint."""

import os
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pymongo.database import Database

from app.db import get_database, mongo_check
from app.models.health import HealthStatus

router = APIRouter()


@router.get("/api/health", response_model=HealthStatus)
def health_check(db: Database = Depends(get_database)) -> HealthStatus:
    """Check API and database health status."""
    ok, summary, err = mongo_check(db)
    return HealthStatus(
        time=datetime.now(timezone.utc),
        mongo="ok" if ok else "error",
        mongo_host=summary.get("host"),
        mongo_db=summary.get("db"),
        mongo_error=err,
        jwt_configured=bool(os.environ.get("JWT_SECRET")),
    )
