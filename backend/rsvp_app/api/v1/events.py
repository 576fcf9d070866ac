from __future__ import annotations

from typing import List, Optional, Union

from fastapi import APIRouter, Query, Request, Response, status

from rsvp_app.api.deps import CredentialDep, CurrentUser, EventDep, StoreDep
from rsvp_app.models import Event
from rsvp_app.schemas import (
    EventCreate,
    EventPublic,
    EventRead,
    EventTokens,
    EventUpdate,
    GuestStats,
    InvitationRead,
    StatusResponse,
)
from rsvp_app.services import events as event_service
from rsvp_app.services.aggregation import summarize_guests
from rsvp_app.services.invitations import build_rsvp_url, render_qr_png
from rsvp_app.services.permissions import Access, authorize, require_access

router = APIRouter()


def _serialize_event(event: Event, access: Access) -> EventRead:
    data = EventRead.model_validate(event)
    if access < Access.ADMIN:
        # Read-only token holders must not learn the secrets
        data = data.model_copy(update={"admin_token": None, "access_token": None})
    return data


@router.get("", response_model=List[EventRead], summary="List own events")
def list_events(store: StoreDep, current_user: CurrentUser) -> List[EventRead]:
    events = store.list_events_by_owner(current_user.id)
    return [_serialize_event(event, Access.OWNER) for event in events]


@router.post(
    "",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create event",
)
def create_event(
    payload: EventCreate,
    store: StoreDep,
    current_user: CurrentUser,
) -> EventRead:
    event = event_service.create_event(store, current_user, payload)
    return _serialize_event(event, Access.OWNER)


@router.get(
    "/{event_id}",
    response_model=Union[EventRead, EventPublic],
    summary="Get event by id",
)
def get_event(event: EventDep, credential: CredentialDep) -> Union[EventRead, EventPublic]:
    """Full record for the owner and token holders, public view otherwise.

    A caller presenting a credential that does not match gets 401/403
    instead of silently falling back to the public view.
    """
    access = authorize(event, credential)
    if access >= Access.VIEWER:
        return _serialize_event(event, access)
    if credential.presented:
        require_access(event, credential, Access.VIEWER)
    return EventPublic.model_validate(event)


@router.put("/{event_id}", response_model=EventRead, summary="Update event")
def update_event(
    event: EventDep,
    payload: EventUpdate,
    store: StoreDep,
    credential: CredentialDep,
) -> EventRead:
    access = require_access(event, credential, Access.ADMIN)
    event = event_service.update_event(store, event, payload)
    return _serialize_event(event, access)


@router.delete(
    "/{event_id}",
    response_model=StatusResponse,
    summary="Delete event and its guests",
)
def delete_event(
    event: EventDep,
    store: StoreDep,
    credential: CredentialDep,
) -> StatusResponse:
    require_access(event, credential, Access.ADMIN)
    removed = event_service.delete_event(store, event.id)
    return StatusResponse(message=f"Event deleted with {removed} guests")


@router.post(
    "/{event_id}/tokens",
    response_model=EventTokens,
    summary="Rotate admin and access tokens",
)
def rotate_event_tokens(
    event: EventDep,
    store: StoreDep,
    credential: CredentialDep,
) -> EventTokens:
    require_access(event, credential, Access.OWNER)
    event = event_service.rotate_tokens(store, event)
    return EventTokens(admin_token=event.admin_token, access_token=event.access_token)


@router.get(
    "/{event_id}/public",
    response_model=EventPublic,
    summary="Public event details for the RSVP page",
)
def get_public_event(event: EventDep) -> EventPublic:
    return EventPublic.model_validate(event)


@router.get(
    "/{event_id}/invitation",
    response_model=InvitationRead,
    summary="Share link and QR code location",
)
def get_invitation(
    event: EventDep,
    credential: CredentialDep,
    request: Request,
) -> InvitationRead:
    require_access(event, credential, Access.ADMIN)
    return InvitationRead(
        event=EventPublic.model_validate(event),
        rsvp_url=build_rsvp_url(event.id),
        qr_code_url=str(request.url_for("get_event_qr_code", event_id=event.id)),
    )


@router.get(
    "/{event_id}/qr.png",
    response_class=Response,
    summary="QR code pointing at the RSVP page",
    responses={200: {"content": {"image/png": {}}}},
)
def get_event_qr_code(event: EventDep) -> Response:
    png = render_qr_png(build_rsvp_url(event.id))
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'inline; filename="rsvp-{event.id}.png"'},
    )


@router.get(
    "/{event_id}/stats",
    response_model=GuestStats,
    summary="Attendance summary",
)
def get_event_stats(
    event: EventDep,
    store: StoreDep,
    credential: CredentialDep,
    invited: Optional[int] = Query(
        default=None, ge=1, description="Size of the invitation list, if known"
    ),
) -> GuestStats:
    require_access(event, credential, Access.VIEWER)
    guests = store.list_guests_by_event(event.id)
    return summarize_guests(guests, invited=invited, guest_count=event.guest_count)
