"""Pydantic schemas for RSVPs.

Attribute names follow the ORM (snake_case); the JSON wire format uses
camelCase aliases. ``populate_by_name`` lets the same models be filled from
ORM objects and keyword arguments.
"""
from __future__ import annotations
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

from app.services.validation import (
    NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    guest_list,
    optional_string,
    required_string,
)


class RsvpCreate(BaseModel):
    """Submission body, normalized leniently.

    The validators never reject: unusable values become None (or an empty
    guest list) and the service decides whether a missing name is an error.
    """

    name: Optional[str] = None
    phone: Optional[str] = None
    guests: list[str] = []

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, value: Any) -> Optional[str]:
        return required_string(value, NAME_MAX_LENGTH)

    @field_validator("phone", mode="before")
    @classmethod
    def normalize_phone(cls, value: Any) -> Optional[str]:
        return optional_string(value, PHONE_MAX_LENGTH)

    @field_validator("guests", mode="before")
    @classmethod
    def normalize_guests(cls, value: Any) -> list[str]:
        return guest_list(value)


class GuestOut(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class RsvpOut(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    guest_names: list[str] = Field(default_factory=list, alias="guestNames")
    created_at: datetime = Field(alias="createdAt")
    guests: list[GuestOut] = []

    model_config = {"from_attributes": True, "populate_by_name": True}


class StatsOut(BaseModel):
    rsvps: int = 0
    guests_count: int = Field(default=0, alias="guestsCount")
    configured: bool
    error: Optional[str] = None

    model_config = {"populate_by_name": True}
