"""RSVP reconciliation.

A guest is identified by (event id, email). Submitting again updates the
existing record in place, and the event's ``guest_count`` is moved by the
difference between what the old and the new answer contribute.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from rsvp_app.core.errors import ConflictError, NotFoundError, ValidationError
from rsvp_app.models import Guest, RSVPResponse
from rsvp_app.schemas import RSVPSubmission
from rsvp_app.store import EventStore

logger = logging.getLogger(__name__)


def _has_full_name(value: Optional[str]) -> bool:
    return bool(value) and len(value.split()) >= 2


def validate_submission(submission: RSVPSubmission) -> None:
    if not submission.name:
        raise ValidationError("Name is required")
    if not submission.email:
        raise ValidationError("Email is required")
    if not submission.response:
        raise ValidationError("Response is required")
    if not _has_full_name(submission.name):
        raise ValidationError("Please enter both a first and last name")

    number_of_guests = submission.number_of_guests or 1
    if submission.response == RSVPResponse.ATTENDING.value and number_of_guests > 1:
        expected = number_of_guests - 1
        names = submission.additional_guest_names or []
        if len(names) < expected:
            raise ValidationError(
                f"Please provide names for all {expected} additional guests"
            )
        for position, name in enumerate(names, start=1):
            if not _has_full_name(name):
                raise ValidationError(
                    f"Additional guest {position} needs a first and last name"
                )


def counter_delta(previous: Optional[Guest], response: str, number_of_guests: int) -> int:
    """Change to guest_count when ``previous`` is replaced by the new answer."""
    new = number_of_guests if response == RSVPResponse.ATTENDING.value else 0
    old = previous.counted_guests if previous is not None else 0
    return new - old


def _reconcile(
    store: EventStore, event_id: str, submission: RSVPSubmission
) -> Tuple[Guest, bool]:
    number_of_guests = submission.number_of_guests or 1

    with store.atomic():
        event = store.get_event(event_id)
        if event is None:
            raise NotFoundError("Event not found")

        existing = store.find_guest(event_id, submission.email, for_update=True)
        delta = counter_delta(existing, submission.response, number_of_guests)

        if existing is None:
            guest = Guest(event_id=event_id, email=submission.email, name=submission.name)
        else:
            guest = existing
            guest.touch()
        guest.name = submission.name
        guest.email = submission.email
        guest.response = submission.response
        guest.number_of_guests = number_of_guests
        guest.additional_guest_names = list(submission.additional_guest_names or [])
        guest.dietary_restrictions = submission.dietary_restrictions
        guest.message = submission.message
        guest = store.put_guest(guest)

        if delta:
            count = store.adjust_guest_count(event_id, delta)
            logger.info(
                f"guest_count for event {event_id} moved by {delta} to {count}"
            )

    return guest, existing is not None


def submit_rsvp(store: EventStore, event_id: str, submission: RSVPSubmission) -> Guest:
    validate_submission(submission)

    try:
        guest, updated = _reconcile(store, event_id, submission)
    except ConflictError:
        # A concurrent first RSVP for the same email inserted the row after
        # our lookup; the second pass finds it and updates it in place.
        logger.info(f"Retrying RSVP for event {event_id} after a concurrent insert")
        guest, updated = _reconcile(store, event_id, submission)

    logger.info(
        f"RSVP {'updated' if updated else 'created'} for event {event_id}: "
        f"guest {guest.id} {guest.response} x{guest.number_of_guests}"
    )
    return guest


def delete_guest(store: EventStore, event_id: str, guest_id: str) -> Guest:
    with store.atomic():
        if store.get_event(event_id) is None:
            raise NotFoundError("Event not found")
        guest = store.get_guest(guest_id)
        if guest is None or guest.event_id != event_id:
            raise NotFoundError("Guest not found")

        if guest.counted_guests:
            store.adjust_guest_count(event_id, -guest.counted_guests)
        store.delete_guest(guest_id)

    logger.info(f"Deleted guest {guest_id} from event {event_id}")
    return guest
