from __future__ import annotations

from fastapi import APIRouter, Body

from rsvp_app.api.deps import CurrentUser, StoreDep
from rsvp_app.models import User
from rsvp_app.schemas import UserRead, UserUpdate

router = APIRouter()


@router.get("/me", response_model=UserRead, summary="Get current user profile")
def get_current_user_profile(current_user: CurrentUser) -> User:
    """Get current authenticated user profile."""
    return current_user


@router.put("/me", response_model=UserRead, summary="Update current user profile")
def update_current_user_profile(
    store: StoreDep,
    current_user: CurrentUser,
    payload: UserUpdate = Body(...),
) -> User:
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(current_user, field, value)
    current_user.touch()
    with store.atomic():
        return store.put_user(current_user)
