"""Domain errors raised by services and rendered by the API layer."""

from __future__ import annotations

from fastapi import status


class RSVPError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RSVPError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(RSVPError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class AuthError(RSVPError):
    """Missing or invalid credential."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(RSVPError):
    """Authenticated, but not allowed to touch this event."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class StoreError(RSVPError):
    """Persistence failure. The message is logged, never sent to clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Store operation failed"


class ConflictError(StoreError):
    """A concurrent transaction wrote a row this one also tried to insert."""

    default_message = "Concurrent write conflict"
