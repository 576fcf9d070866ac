from .common import ErrorResponse, StatusResponse, as_utc, blank_to_none
from .event import (
    EventCreate,
    EventPublic,
    EventRead,
    EventTokens,
    EventUpdate,
    InvitationRead,
)
from .guest import GuestRead, GuestStats, RSVPSubmission
from .user import (
    RefreshTokenRequest,
    TokenPair,
    UserCreate,
    UserLogin,
    UserRead,
    UserUpdate,
)

__all__ = [
    "ErrorResponse",
    "StatusResponse",
    "as_utc",
    "blank_to_none",
    "EventCreate",
    "EventPublic",
    "EventRead",
    "EventTokens",
    "EventUpdate",
    "InvitationRead",
    "GuestRead",
    "GuestStats",
    "RSVPSubmission",
    "RefreshTokenRequest",
    "TokenPair",
    "UserCreate",
    "UserLogin",
    "UserRead",
    "UserUpdate",
]
