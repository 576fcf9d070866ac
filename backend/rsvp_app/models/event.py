from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel


def new_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp; datetime columns reject naive values."""
    return datetime.now(timezone.utc)


class Event(SQLModel, table=True):
    """Hosted event collecting RSVPs."""

    __tablename__ = "events"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(foreign_key="users.id", nullable=False, index=True, max_length=128)
    name: str = Field(max_length=255)
    date: datetime = Field(nullable=False, index=True)
    end_date: Optional[datetime] = Field(default=None, nullable=True)
    location: str = Field(max_length=500)
    venue: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, max_length=5000)
    image_url: Optional[str] = Field(default=None, max_length=1000)
    dress_code: Optional[str] = Field(default=None, max_length=255)
    instructions: Optional[str] = Field(default=None, max_length=2000)
    host_name: Optional[str] = Field(default=None, max_length=255)
    host_email: str = Field(max_length=255)
    admin_token: str = Field(max_length=128, index=True)
    access_token: Optional[str] = Field(default=None, max_length=128, index=True)
    # Attending headcount, adjusted atomically by the RSVP reconciler
    guest_count: int = Field(default=0, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

    def touch(self) -> None:
        self.updated_at = utcnow()
