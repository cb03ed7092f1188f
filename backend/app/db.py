from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Optional
from urllib.parse import quote_plus, urlsplit

import certifi
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

logger = logging.getLogger("neighbor_alert.db")

DEFAULT_DB_NAME = "neighbor-alert"


def _build_mongodb_uri() -> str:
    # Prefer a full URI when provided (Atlas/local, replica sets, etc.).
    uri = os.environ.get("MONGODB_URI")
    if uri:
        return uri

    host = os.environ.get("MONGO_HOST", "localhost")
    port = os.environ.get("MONGO_PORT", "27017")
    db = os.environ.get("MONGO_DB", DEFAULT_DB_NAME)

    user = os.environ.get("MONGO_USER")
    password = os.environ.get("MONGO_PASSWORD")
    auth_source = os.environ.get("MONGO_AUTH_SOURCE", db)

    if user and password:
        u = quote_plus(user)
        p = quote_plus(password)
        a = quote_plus(auth_source)
        return f"mongodb://{u}:{p}@{host}:{port}/{db}?authSource={a}"

    return f"mongodb://{host}:{port}/{db}"


def mongo_uri_summary(uri: Optional[str] = None) -> dict:
    """
    Non-sensitive summary of the configured Mongo URI.
    Useful for telling Atlas and localhost apart from /api/health.
    """
    u = uri or _build_mongodb_uri()
    parts = urlsplit(u)

    netloc = parts.netloc
    # user:pass@host -> host
    if "@" in netloc:
        netloc = netloc.split("@", 1)[1]

    db_name = (parts.path or "").lstrip("/") or None

    return {
        "scheme": parts.scheme or None,
        "host": netloc or None,
        "db": db_name,
    }


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, str(default)))
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_mongo_client() -> MongoClient:
    # Short timeouts so /api/health doesn't hang when the DB is down,
    # long enough for Atlas TLS + replica set discovery.
    uri = _build_mongodb_uri()

    kwargs = {
        "serverSelectionTimeoutMS": _int_env("MONGO_SERVER_SELECTION_TIMEOUT_MS", 5000),
        "connectTimeoutMS": _int_env("MONGO_CONNECT_TIMEOUT_MS", 5000),
        # Read datetimes back as UTC-aware so the API emits an explicit offset.
        "tz_aware": True,
    }

    # Force a known CA bundle when using TLS (Atlas defaults to TLS).
    if uri.startswith("mongodb+srv://") or "tls=true" in uri or "ssl=true" in uri:
        kwargs["tlsCAFile"] = certifi.where()

    return MongoClient(uri, **kwargs)


def mongo_check(db: Optional[Database] = None) -> tuple[bool, dict, Optional[str]]:
    """
    Returns (ok, summary, error_string).
    """
    summary = mongo_uri_summary()
    try:
        database = db if db is not None else get_database()
        database.command("ping")
        return True, summary, None
    except Exception as e:
        # Driver exception messages do not carry credentials.
        return False, summary, f"{e.__class__.__name__}: {e}"


def get_database() -> Database:
    """FastAPI dependency returning the application database."""
    client = get_mongo_client()
    # The URI path names the database; `get_default_database()` raises when it doesn't.
    try:
        db = client.get_default_database()
    except Exception:
        db = None
    if db is None:
        db = client[os.environ.get("MONGO_DB", DEFAULT_DB_NAME)]
    return db


def ensure_indexes(db: Database) -> None:
    """Create the indexes the API relies on. Safe to call repeatedly."""
    db["users"].create_index("email", unique=True)
    db["alerts"].create_index([("createdAt", DESCENDING)])
    db["alerts"].create_index([("user", ASCENDING), ("createdAt", DESCENDING)])
    logger.info("Mongo indexes ensured on %s", db.name)
