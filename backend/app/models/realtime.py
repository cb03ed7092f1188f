"""Payloads exchanged over the /ws realtime channel."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.alert import Coordinates


class Envelope(BaseModel):
    event: str = Field(min_length=1)
    data: Any = None


class UserJoin(BaseModel):
    model_config = ConfigDict(extra="ignore")

    userId: str = Field(min_length=1)
    userName: Optional[str] = None
    location: Optional[Coordinates] = None


class UpdateLocation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    userId: str = Field(min_length=1)
    location: Coordinates


class DismissNotification(BaseModel):
    id: str = Field(min_length=1)
