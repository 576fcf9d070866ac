from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .common import blank_to_none


class RSVPSubmission(BaseModel):
    name: str
    email: EmailStr
    response: Literal["attending", "declined"]
    number_of_guests: Optional[int] = Field(default=None, ge=1)
    additional_guest_names: Optional[List[str]] = None
    dietary_restrictions: Optional[str] = None
    message: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("additional_guest_names", mode="before")
    @classmethod
    def strip_names(cls, value):
        if isinstance(value, list):
            return [item.strip() if isinstance(item, str) else item for item in value]
        return value

    @field_validator("dietary_restrictions", "message", mode="before")
    @classmethod
    def normalize_optional(cls, value):
        return blank_to_none(value)


class GuestRead(BaseModel):
    id: str
    event_id: str
    name: str
    email: str
    response: str
    number_of_guests: int
    additional_guest_names: List[str] = []
    dietary_restrictions: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GuestStats(BaseModel):
    """Attendance figures recomputed from the guest list."""

    attending_count: int = Field(default=0, description="RSVPs answering attending")
    declined_count: int = Field(default=0, description="RSVPs answering declined")
    total_guests: int = Field(default=0, description="Attending headcount incl. plus-ones")
    response_count: int = Field(default=0, description="RSVPs received")
    response_rate: float = Field(default=0.0, description="Responses per invited guest, 0..1")
    guest_count: Optional[int] = Field(
        default=None, description="Headcount stored on the event record"
    )
