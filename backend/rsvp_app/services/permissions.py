from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from rsvp_app.core.errors import AuthError, ForbiddenError
from rsvp_app.core.security import tokens_match
from rsvp_app.models import Event, User


class Access(IntEnum):
    """What a caller may do with one event, weakest first."""

    PUBLIC = 0
    VIEWER = 1  # holds the access token
    ADMIN = 2  # holds the admin token
    OWNER = 3


@dataclass(frozen=True)
class Credential:
    """Everything a request presented to prove who it is."""

    user: Optional[User] = None
    token: Optional[str] = None

    @property
    def presented(self) -> bool:
        return self.user is not None or bool(self.token)


def authorize(event: Event, credential: Credential) -> Access:
    if credential.user is not None and credential.user.id == event.user_id:
        return Access.OWNER
    if tokens_match(credential.token, event.admin_token):
        return Access.ADMIN
    if tokens_match(credential.token, event.access_token):
        return Access.VIEWER
    return Access.PUBLIC


def require_access(
    event: Event,
    credential: Credential,
    minimum: Access,
) -> Access:
    access = authorize(event, credential)
    if access >= minimum:
        return access

    if credential.user is None:
        if credential.token and minimum < Access.OWNER:
            raise AuthError("Invalid event token")
        raise AuthError("Authentication required")
    raise ForbiddenError("Access to event denied")
