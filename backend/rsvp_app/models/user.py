from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from .event import new_id, utcnow


class User(SQLModel, table=True):
    """Event host account.

    ``id`` is the identity provider's subject. Rows are created on the first
    authenticated request when they do not exist yet.
    """

    __tablename__ = "users"

    id: str = Field(default_factory=new_id, primary_key=True, index=True, max_length=128)
    email: str = Field(index=True, unique=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)
    image: Optional[str] = Field(default=None, max_length=1000)
    # Only set for accounts registered with email and password
    hashed_password: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)

    def touch(self) -> None:
        self.updated_at = utcnow()
