"""Authentication and profile routes."""

import logging

from fastapi import APIRouter, Depends, Response
from pymongo.database import Database

from app.auth import (
    authenticate_user,
    clear_auth_cookie,
    create_access_token,
    create_user,
    require_user_id,
    set_auth_cookie,
)
from app.db import get_database
from app.models.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    RegisterResponse,
    UserProfile,
    UserSummary,
)
from app.services.users import change_password, get_profile, update_profile

router = APIRouter()
logger = logging.getLogger("neighbor_alert.auth")


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    payload: RegisterRequest,
    response: Response,
    db: Database = Depends(get_database),
) -> RegisterResponse:
    """Register a new user account and sign it in."""
    user = create_user(db, name=payload.name, email=payload.email, password=payload.password)
    token = create_access_token(sub=str(user["_id"]))
    set_auth_cookie(response, token)
    return RegisterResponse(
        user=UserSummary(id=str(user["_id"]), name=user["name"], email=user["email"]),
        token=token,
    )


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    response: Response,
    db: Database = Depends(get_database),
) -> LoginResponse:
    """Authenticate user and return an access token."""
    user = authenticate_user(db, email=payload.email, password=payload.password)
    token = create_access_token(sub=str(user["_id"]))
    set_auth_cookie(response, token)
    logger.info("User %s logged in", user["_id"], extra={"user_id": str(user["_id"])})
    return LoginResponse(user=UserProfile.from_doc(user), token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    clear_auth_cookie(response)
    return MessageResponse(message="Logged out")


@router.get("/profile", response_model=UserProfile)
def read_profile(
    user_id: str = Depends(require_user_id),
    db: Database = Depends(get_database),
) -> UserProfile:
    return UserProfile.from_doc(get_profile(db, user_id))


@router.put("/profile", response_model=UserProfile)
def edit_profile(
    payload: ProfileUpdateRequest,
    user_id: str = Depends(require_user_id),
    db: Database = Depends(get_database),
) -> UserProfile:
    return UserProfile.from_doc(update_profile(db, user_id, payload))


@router.put("/change-password", response_model=MessageResponse)
def put_change_password(
    payload: ChangePasswordRequest,
    user_id: str = Depends(require_user_id),
    db: Database = Depends(get_database),
) -> MessageResponse:
    change_password(db, user_id, payload.currentPassword, payload.newPassword)
    return MessageResponse(message="Password updated successfully")
