"""
Pytest configuration and fixtures.

The database dependency is swapped for an in-memory mongomock database, so
no MongoDB server is needed.
"""

from __future__ import annotations

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ["LOG_LEVEL"] = "WARNING"

import mongomock
import pytest
from fastapi.testclient import TestClient

TEST_PASSWORD = "hunter22"


@pytest.fixture
def db():
    return mongomock.MongoClient()["neighbor-alert-test"]


@pytest.fixture
def app(db):
    from app.db import get_database
    from app.main import create_app

    application = create_app()
    application.dependency_overrides[get_database] = lambda: db
    return application


@pytest.fixture
def client(app):
    """Entered as a context manager so lifespan runs and websockets share one loop."""
    with TestClient(app) as c:
        yield c


def register(client: TestClient, name: str, email: str, password: str = TEST_PASSWORD):
    """Register a user; returns (user_id, auth headers)."""
    resp = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}


def alert_payload(**overrides) -> dict:
    payload = {
        "title": "Flood",
        "description": "Water over the road on Main St",
        "severity": "High",
        "location": "Main St underpass",
        "coordinates": {"lat": 40.0, "lng": -74.0},
        "radius": 5,
    }
    payload.update(overrides)
    return payload
