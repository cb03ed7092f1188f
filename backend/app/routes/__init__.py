"""API route modules for the Neighbor Alert API."""

from app.routes.health import router as health_router
from app.routes.auth import router as auth_router
from app.routes.alerts import router as alerts_router
from app.routes.realtime import router as realtime_router


def register_routes(app) -> None:
    """Register all route modules with the FastAPI app."""
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(alerts_router, prefix="/api/alerts", tags=["alerts"])
    app.include_router(realtime_router, tags=["realtime"])
