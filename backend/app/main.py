"""
FastAPI application entry point.

Run with:
    uvicorn app.main:app --app-dir backend --reload --port 5000
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.db import ensure_indexes, get_database
from app.errors import register_error_handlers
from app.logging_config import setup_logging
from app.middleware import RequestLoggingMiddleware
from app.realtime import RealtimeHub
from app.routes import register_routes

# Ensure backend/.env is loaded regardless of launch directory.
load_dotenv(Path(__file__).resolve().parents[1] / ".env")

logger = logging.getLogger("neighbor_alert")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Honour dependency overrides so tests index their in-memory database.
    database_factory = app.dependency_overrides.get(get_database, get_database)
    try:
        ensure_indexes(database_factory())
    except Exception:
        logger.warning("Could not ensure Mongo indexes at startup", exc_info=True)
    yield
    logger.info("Shutting down with %d realtime client(s) connected", len(app.state.realtime.sessions))


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="Neighbor Alert API", version="0.1.0", lifespan=lifespan)
    app.state.realtime = RealtimeHub()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[os.environ.get("CLIENT_URL", "http://localhost:3000")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    register_routes(app)
    return app


app = create_app()
