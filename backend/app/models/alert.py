"""Alert-related Pydantic models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_utc(value: datetime) -> datetime:
    """Stored timestamps are UTC; naive ones (driver without tz_aware) get the zone attached."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Coordinates(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class AlertCreateRequest(BaseModel):
    """Body of POST /api/alerts.

    Owner fields are not part of the schema; anything extra the client sends
    (``user``, ``userName`` ...) is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    severity: Severity = Severity.MEDIUM
    location: str = Field(min_length=1)
    coordinates: Coordinates
    radius: float = Field(default=5, gt=0)

    @field_validator("title", "description", "location")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class AlertResponse(BaseModel):
    """Alert as stored and returned to clients (UI wire names via aliases)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    description: str
    severity: Severity = Severity.MEDIUM
    location: str
    coordinates: Optional[Coordinates] = None
    radius: float = 5
    owner: str = Field(alias="user")
    owner_name: str = Field(alias="userName")
    owner_contact: str = Field(default="", alias="userContact")
    created_at: datetime = Field(alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def _utc_created_at(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("coordinates", mode="before")
    @classmethod
    def _lenient_coordinates(cls, value: Any) -> Any:
        # Legacy documents may hold partial or malformed coordinates.
        if not isinstance(value, dict):
            return None
        try:
            return Coordinates(**value)
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_doc(cls, doc: dict) -> "AlertResponse":
        return cls(
            id=str(doc["_id"]),
            title=doc.get("title", ""),
            description=doc.get("description", ""),
            severity=doc.get("severity") or Severity.MEDIUM,
            location=doc.get("location", ""),
            coordinates=doc.get("coordinates"),
            radius=doc.get("radius", 5),
            owner=str(doc.get("user", "")),
            owner_name=doc.get("userName", ""),
            owner_contact=doc.get("userContact") or "",
            created_at=doc["createdAt"],
        )
