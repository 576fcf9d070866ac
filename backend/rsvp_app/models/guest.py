from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from .event import new_id, utcnow


class RSVPResponse(str, Enum):
    ATTENDING = "attending"
    DECLINED = "declined"


class Guest(SQLModel, table=True):
    """One RSVP per (event, email)."""

    __tablename__ = "guests"
    __table_args__ = (
        UniqueConstraint("event_id", "email", name="uq_guests_event_email"),
    )

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    event_id: str = Field(foreign_key="events.id", nullable=False, index=True, max_length=64)
    name: str = Field(max_length=255)
    email: str = Field(index=True, max_length=255)
    response: str = Field(default=RSVPResponse.ATTENDING.value, max_length=32)  # attending, declined
    number_of_guests: int = Field(default=1, nullable=False)
    additional_guest_names: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    dietary_restrictions: Optional[str] = Field(default=None, max_length=1000)
    message: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

    @property
    def is_attending(self) -> bool:
        return self.response == RSVPResponse.ATTENDING.value

    @property
    def counted_guests(self) -> int:
        """Headcount this RSVP contributes to the event's guest_count."""
        return (self.number_of_guests or 1) if self.is_attending else 0

    def touch(self) -> None:
        self.updated_at = utcnow()
