"""Pydantic models for the Neighbor Alert API."""

from app.models.alert import (
    Severity,
    Coordinates,
    AlertCreateRequest,
    AlertResponse,
)
from app.models.auth import (
    RegisterRequest,
    LoginRequest,
    UserSummary,
    UserProfile,
    RegisterResponse,
    LoginResponse,
    ProfileUpdateRequest,
    ChangePasswordRequest,
    MessageResponse,
)
from app.models.realtime import (
    Envelope,
    UserJoin,
    UpdateLocation,
    DismissNotification,
)
from app.models.health import HealthStatus

__all__ = [
    # Alert
    "Severity",
    "Coordinates",
    "AlertCreateRequest",
    "AlertResponse",
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "UserSummary",
    "UserProfile",
    "RegisterResponse",
    "LoginResponse",
    "ProfileUpdateRequest",
    "ChangePasswordRequest",
    "MessageResponse",
    # Realtime
    "Envelope",
    "UserJoin",
    "UpdateLocation",
    "DismissNotification",
    # Health
    "HealthStatus",
]
