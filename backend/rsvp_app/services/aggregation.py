from __future__ import annotations

from typing import Iterable, Optional

from rsvp_app.models import Guest, RSVPResponse
from rsvp_app.schemas import GuestStats


def summarize_guests(
    guests: Iterable[Guest],
    invited: Optional[int] = None,
    guest_count: Optional[int] = None,
) -> GuestStats:
    """Recompute attendance figures from the guest list.

    ``invited`` is the size of the invitation list when the host keeps one;
    otherwise the response rate is taken over the guests who answered.
    ``guest_count`` is the denormalized total stored on the event and is
    passed through so hosts can compare it with ``total_guests``.
    """
    guests = list(guests)
    stats = GuestStats(guest_count=guest_count)
    for guest in guests:
        if guest.response == RSVPResponse.ATTENDING.value:
            stats.attending_count += 1
            stats.total_guests += guest.counted_guests
        elif guest.response == RSVPResponse.DECLINED.value:
            stats.declined_count += 1

    stats.response_count = stats.attending_count + stats.declined_count
    denominator = invited if invited else len(guests)
    if denominator:
        stats.response_rate = round(stats.response_count / denominator, 4)
    return stats
