from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel


def blank_to_none(value: Any) -> Optional[Any]:
    """Treat empty and whitespace-only strings the same as a missing value."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ErrorResponse(BaseModel):
    error: str


class StatusResponse(BaseModel):
    success: bool = True
    message: str
