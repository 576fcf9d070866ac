from .event import Event
from .guest import Guest, RSVPResponse
from .user import User

__all__ = [
    "Event",
    "Guest",
    "RSVPResponse",
    "User",
]
