from __future__ import annotations

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Query, Request, status
from fastapi.security import OAuth2PasswordBearer

from rsvp_app.core.config import settings
from rsvp_app.core.security import verify_token
from rsvp_app.models import Event, User
from rsvp_app.services.events import get_event_or_404
from rsvp_app.services.permissions import Credential
from rsvp_app.store import EventStore

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False
)


def get_store(request: Request) -> EventStore:
    return request.app.state.store


StoreDep = Annotated[EventStore, Depends(get_store)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_user(store: EventStore, token: str) -> User:
    try:
        payload = verify_token(token, token_type="access")
    except ValueError:
        raise _unauthorized("Could not validate credentials") from None

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Invalid authentication payload")

    user = store.get_user(user_id)
    if user is not None:
        return user

    # First request from an identity-provider account: create it from the claims
    email = (payload.get("email") or "").strip().lower()
    if not email:
        raise _unauthorized("Unknown user")
    if store.get_user_by_email(email) is not None:
        raise _unauthorized("Email is linked to another account")

    user = User(
        id=user_id,
        email=email,
        name=payload.get("name"),
        image=payload.get("picture"),
    )
    with store.atomic():
        user = store.put_user(user)
    logger.info(f"Created user {user.id} on first sign-in")
    return user


def get_optional_user(
    store: StoreDep,
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[User]:
    if not token:
        return None
    return _resolve_user(store, token)


def get_current_user(
    user: Optional[User] = Depends(get_optional_user),
) -> User:
    if user is None:
        raise _unauthorized("Not authenticated")
    return user


def get_credential(
    user: Optional[User] = Depends(get_optional_user),
    token: Optional[str] = Query(
        default=None, description="Event admin or access token"
    ),
    x_event_token: Optional[str] = Header(default=None),
) -> Credential:
    return Credential(user=user, token=token or x_event_token)


def load_event(event_id: str, store: StoreDep) -> Event:
    return get_event_or_404(store, event_id)


CurrentUser = Annotated[User, Depends(get_current_user)]
CredentialDep = Annotated[Credential, Depends(get_credential)]
EventDep = Annotated[Event, Depends(load_event)]
