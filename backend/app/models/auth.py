"""Authentication and profile Pydantic models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.alert import Coordinates, as_utc

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value.strip()

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("invalid email")
        return value


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserSummary(BaseModel):
    id: str
    name: str
    email: str


class UserProfile(UserSummary):
    avatar: str = ""
    bio: str = ""
    address: str = ""
    phoneNumber: str = ""
    defaultLocation: Optional[Coordinates] = None
    notificationRadius: float = 5
    createdAt: Optional[datetime] = None

    @field_validator("createdAt")
    @classmethod
    def _utc_created_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None

    @classmethod
    def from_doc(cls, doc: dict) -> "UserProfile":
        return cls(
            id=str(doc["_id"]),
            name=doc.get("name", ""),
            email=doc.get("email", ""),
            avatar=doc.get("avatar") or "",
            bio=doc.get("bio") or "",
            address=doc.get("address") or "",
            phoneNumber=doc.get("phoneNumber") or "",
            defaultLocation=doc.get("defaultLocation"),
            notificationRadius=doc.get("notificationRadius") or 5,
            createdAt=doc.get("createdAt"),
        )


class RegisterResponse(BaseModel):
    user: UserSummary
    token: str


class LoginResponse(BaseModel):
    user: UserProfile
    token: str


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    bio: Optional[str] = None
    address: Optional[str] = None
    phoneNumber: Optional[str] = None
    defaultLocation: Optional[Coordinates] = None
    notificationRadius: Optional[float] = Field(default=None, gt=0)
    avatar: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    currentPassword: str
    newPassword: str = Field(min_length=MIN_PASSWORD_LENGTH)


class MessageResponse(BaseModel):
    message: str
