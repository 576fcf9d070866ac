from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationInfo,
    field_validator,
)

from .common import as_utc, blank_to_none

OPTIONAL_TEXT_FIELDS = (
    "venue",
    "description",
    "image_url",
    "dress_code",
    "instructions",
    "host_name",
)


class EventBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    date: datetime
    end_date: Optional[datetime] = None
    location: str = Field(min_length=1, max_length=500)
    venue: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    dress_code: Optional[str] = None
    instructions: Optional[str] = None
    host_name: Optional[str] = None

    @field_validator("name", "location", mode="before")
    @classmethod
    def strip_required(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator(*OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def normalize_optional(cls, value):
        return blank_to_none(value)

    @field_validator("date", "end_date")
    @classmethod
    def normalize_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @field_validator("end_date")
    @classmethod
    def check_ends_after_start(
        cls, end_date: Optional[datetime], info: ValidationInfo
    ) -> Optional[datetime]:
        date: datetime | None = as_utc(info.data.get("date"))
        end_date = as_utc(end_date)
        if date and end_date and end_date < date:
            raise ValueError("end_date must be greater than or equal to date")
        return end_date


class EventCreate(EventBase):
    host_email: Optional[EmailStr] = None

    @field_validator("host_email", mode="before")
    @classmethod
    def normalize_host_email(cls, value):
        return blank_to_none(value)


class EventUpdate(BaseModel):
    """Partial update; fields left as None are not touched."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=500)
    venue: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    dress_code: Optional[str] = None
    instructions: Optional[str] = None
    host_name: Optional[str] = None
    host_email: Optional[EmailStr] = None

    @field_validator("name", "location", mode="before")
    @classmethod
    def strip_required(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator(*OPTIONAL_TEXT_FIELDS, "host_email", mode="before")
    @classmethod
    def normalize_optional(cls, value):
        return blank_to_none(value)

    @field_validator("date", "end_date")
    @classmethod
    def normalize_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class EventPublic(BaseModel):
    """What a guest holding only the event id may see."""

    id: str
    name: str
    date: datetime
    end_date: Optional[datetime] = None
    location: str
    venue: Optional[str] = None
    description: Optional[str] = None
    host_name: Optional[str] = None
    image_url: Optional[str] = None
    dress_code: Optional[str] = None
    instructions: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class EventRead(EventPublic):
    user_id: str
    host_email: str
    guest_count: int
    created_at: datetime
    updated_at: datetime
    # Tokens are only filled in for callers with full access
    admin_token: Optional[str] = None
    access_token: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class EventTokens(BaseModel):
    admin_token: str
    access_token: str


class InvitationRead(BaseModel):
    event: EventPublic
    rsvp_url: str
    qr_code_url: str
