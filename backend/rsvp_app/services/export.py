from __future__ import annotations

import csv
import io
from typing import Iterable

from rsvp_app.models import Guest

CSV_HEADERS = [
    "Name",
    "Email",
    "Response",
    "Number of Guests",
    "Additional Guests",
    "Dietary Restrictions",
    "Message",
    "Responded At",
]


def guests_to_csv(guests: Iterable[Guest]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADERS)
    for guest in guests:
        writer.writerow(
            [
                guest.name,
                guest.email,
                guest.response,
                guest.number_of_guests,
                "; ".join(guest.additional_guest_names or []),
                guest.dietary_restrictions or "",
                guest.message or "",
                guest.updated_at.isoformat(timespec="seconds"),
            ]
        )
    return output.getvalue()
