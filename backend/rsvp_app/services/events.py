from __future__ import annotations

import logging

from rsvp_app.core.errors import NotFoundError, ValidationError
from rsvp_app.core.security import generate_event_token
from rsvp_app.models import Event, User
from rsvp_app.schemas import EventCreate, EventUpdate, as_utc
from rsvp_app.store import EventStore

logger = logging.getLogger(__name__)

# Required on the record, so an explicit null in an update is ignored
_REQUIRED_FIELDS = {"name", "date", "location", "host_email"}


def get_event_or_404(store: EventStore, event_id: str) -> Event:
    event = store.get_event(event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return event


def create_event(store: EventStore, owner: User, payload: EventCreate) -> Event:
    data = payload.model_dump()
    data["host_email"] = data.get("host_email") or owner.email
    if not data.get("host_name"):
        data["host_name"] = owner.name

    event = Event(
        **data,
        user_id=owner.id,
        admin_token=generate_event_token(),
        access_token=generate_event_token(),
        guest_count=0,
    )
    with store.atomic():
        event = store.put_event(event)
    logger.info(f"Event {event.id} created by user {owner.id}")
    return event


def update_event(store: EventStore, event: Event, payload: EventUpdate) -> Event:
    changes = payload.model_dump(exclude_unset=True)
    for field in _REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            changes.pop(field)

    date = as_utc(changes.get("date", event.date))
    end_date = as_utc(changes.get("end_date", event.end_date))
    if end_date is not None and end_date < date:
        raise ValidationError("end_date must be greater than or equal to date")

    for field, value in changes.items():
        setattr(event, field, value)
    event.touch()

    with store.atomic():
        # put_event keeps the stored guest_count, not the one read earlier
        stored = store.put_event(event)
    logger.info(f"Event {event.id} updated: {sorted(changes)}")
    return stored


def rotate_tokens(store: EventStore, event: Event) -> Event:
    """Issue fresh admin and access tokens, invalidating shared links."""
    event.admin_token = generate_event_token()
    event.access_token = generate_event_token()
    event.touch()
    with store.atomic():
        stored = store.put_event(event)
    logger.info(f"Rotated tokens for event {event.id}")
    return stored


def delete_event(store: EventStore, event_id: str) -> int:
    """Delete the event together with all of its guests."""
    with store.atomic():
        get_event_or_404(store, event_id)
        removed = store.delete_event(event_id)
    logger.info(f"Deleted event {event_id} and {removed} guests")
    return removed
