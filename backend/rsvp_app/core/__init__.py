from .config import settings
from .errors import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RSVPError,
    StoreError,
    ValidationError,
)
from .security import (
    create_access_token,
    create_refresh_token,
    generate_event_token,
    get_password_hash,
    tokens_match,
    verify_token,
    verify_password,
)

__all__ = [
    "settings",
    "AuthError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "RSVPError",
    "StoreError",
    "ValidationError",
    "create_access_token",
    "create_refresh_token",
    "generate_event_token",
    "get_password_hash",
    "tokens_match",
    "verify_token",
    "verify_password",
]
