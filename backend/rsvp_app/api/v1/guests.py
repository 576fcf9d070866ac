from typing import List

from fastapi import APIRouter, Request, Response

from rsvp_app.api.deps import CredentialDep, EventDep, StoreDep
from rsvp_app.core.config import settings
from rsvp_app.core.limiter import limiter
from rsvp_app.models import Guest
from rsvp_app.schemas import GuestRead, RSVPSubmission, StatusResponse
from rsvp_app.services import rsvp as rsvp_service
from rsvp_app.services.export import guests_to_csv
from rsvp_app.services.permissions import Access, require_access

router = APIRouter()


@router.get(
    "/{event_id}/guests",
    response_model=List[GuestRead],
    summary="List guests of an event",
)
def list_guests(
    event: EventDep,
    store: StoreDep,
    credential: CredentialDep,
) -> List[Guest]:
    require_access(event, credential, Access.VIEWER)
    return store.list_guests_by_event(event.id)


@router.get(
    "/{event_id}/guests/export",
    response_class=Response,
    summary="Download the guest list as CSV",
    responses={200: {"content": {"text/csv": {}}}},
)
def export_guests(
    event: EventDep,
    store: StoreDep,
    credential: CredentialDep,
) -> Response:
    require_access(event, credential, Access.VIEWER)
    content = guests_to_csv(store.list_guests_by_event(event.id))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="guests-{event.id}.csv"'},
    )


@router.post(
    "/{event_id}/guests",
    response_model=GuestRead,
    summary="Submit or update an RSVP",
)
@router.post("/{event_id}/rsvp", response_model=GuestRead, include_in_schema=False)
@limiter.limit(settings.RSVP_RATE_LIMIT)
def submit_rsvp(
    request: Request,
    event_id: str,
    payload: RSVPSubmission,
    store: StoreDep,
) -> Guest:
    """Public: anyone who knows the event id may answer."""
    return rsvp_service.submit_rsvp(store, event_id, payload)


@router.delete(
    "/{event_id}/guests/{guest_id}",
    response_model=StatusResponse,
    summary="Delete a guest",
)
def delete_guest(
    event: EventDep,
    guest_id: str,
    store: StoreDep,
    credential: CredentialDep,
) -> StatusResponse:
    require_access(event, credential, Access.ADMIN)
    rsvp_service.delete_guest(store, event.id, guest_id)
    return StatusResponse(message="Guest deleted successfully")
