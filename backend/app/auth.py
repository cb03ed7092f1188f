from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends, HTTPException, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

logger = logging.getLogger("neighbor_alert.auth")

# pbkdf2_sha256 is available without platform-specific wheels.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)

AUTH_COOKIE = "token"
DEFAULT_TOKEN_MINUTES = 7 * 24 * 60


def _jwt_secret() -> str:
    secret = os.environ.get("JWT_SECRET")
    if not secret:
        # Explicit error to avoid silently issuing unverifiable tokens.
        raise RuntimeError("JWT_SECRET is not set")
    return secret


def _jwt_alg() -> str:
    return os.environ.get("JWT_ALG", "HS256")


def _jwt_expires_minutes() -> int:
    try:
        return int(os.environ.get("JWT_EXPIRES_MIN", str(DEFAULT_TOKEN_MINUTES)))
    except ValueError:
        return DEFAULT_TOKEN_MINUTES


def _is_production() -> bool:
    return os.environ.get("APP_ENV", "development").strip().lower() == "production"


def _users(db: Database):
    return db["users"]


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


def create_access_token(*, sub: str) -> str:
    now = datetime.now(tz=timezone.utc)
    exp = now + timedelta(minutes=_jwt_expires_minutes())
    payload = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, _jwt_secret(), algorithm=_jwt_alg())


def decode_access_token(token: str) -> Optional[str]:
    """Return the user id carried by a valid token, None otherwise."""
    try:
        payload = jwt.decode(token, _jwt_secret(), algorithms=[_jwt_alg()])
    except JWTError:
        return None
    sub = payload.get("sub")
    return sub if isinstance(sub, str) and sub else None


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        AUTH_COOKIE,
        token,
        max_age=_jwt_expires_minutes() * 60,
        httponly=True,
        secure=_is_production(),
        samesite="lax",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(AUTH_COOKIE, httponly=True, secure=_is_production(), samesite="lax")


def user_object_id(user_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(user_id)
    except (InvalidId, TypeError):
        return None


def get_user_by_email(db: Database, email: str) -> Optional[dict]:
    return _users(db).find_one({"email": email})


def get_user_by_id(db: Database, user_id: str) -> Optional[dict]:
    oid = user_object_id(user_id)
    if oid is None:
        return None
    return _users(db).find_one({"_id": oid})


def create_user(db: Database, *, name: str, email: str, password: str) -> dict:
    users = _users(db)
    if users.find_one({"email": email}):
        raise HTTPException(status_code=400, detail="User already exists")

    doc = {
        "name": name,
        "email": email,
        "password": hash_password(password),
        "avatar": "",
        "bio": "",
        "address": "",
        "phoneNumber": "",
        "defaultLocation": None,
        "notificationRadius": 5,
        "createdAt": datetime.now(tz=timezone.utc),
    }
    try:
        res = users.insert_one(doc)
    except DuplicateKeyError:
        # Lost a race with a concurrent registration for the same email.
        raise HTTPException(status_code=400, detail="User already exists")
    doc["_id"] = res.inserted_id
    logger.info("Registered user %s", doc["_id"], extra={"user_id": str(doc["_id"])})
    return doc


def authenticate_user(db: Database, email: str, password: str) -> dict:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.get("password", "")):
        raise HTTPException(status_code=400, detail="Invalid credentials")
    return user


def require_user_id(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Bearer header first, then the httpOnly cookie.
    Missing token -> 401, invalid or expired token -> 403.
    """
    token = creds.credentials if creds is not None else request.cookies.get(AUTH_COOKIE)
    if not token:
        raise HTTPException(status_code=401, detail="Authentication failed: No token provided")

    user_id = decode_access_token(token)
    if user_id is None:
        raise HTTPException(status_code=403, detail="Authentication failed: Invalid token")
    return user_id
